"""Bitmap-style physical page allocator over a fixed address range."""

PAGE_SIZE = 4096
MAX_PAGES = 131072

_PAGE_MASK = PAGE_SIZE - 1


def _align_up(addr: int) -> int:
    return (addr + _PAGE_MASK) & ~_PAGE_MASK


def _align_down(addr: int) -> int:
    return addr & ~_PAGE_MASK


class PageAllocator:
    """Hands out page-aligned addresses from a managed range."""

    def __init__(self, range_start: int = 0, range_end: int = 0) -> None:
        self.reset(range_start, range_end)

    def reset(self, range_start: int, range_end: int) -> None:
        """Manage the pages inside [range_start, range_end), all free."""
        start = _align_up(range_start)
        end = _align_down(range_end)

        self._range_start = 0
        self._range_end = 0
        self._total_pages = 0
        self._free_pages = 0
        self._next_hint = 0
        self._used = bytearray()

        if end <= start:
            return

        total = (end - start) // PAGE_SIZE
        if total > MAX_PAGES:
            total = MAX_PAGES
            end = start + total * PAGE_SIZE

        self._range_start = start
        self._range_end = end
        self._total_pages = total
        self._free_pages = total
        self._used = bytearray(total)

    @property
    def range_start(self) -> int:
        return self._range_start

    @property
    def range_end(self) -> int:
        return self._range_end

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def free_pages(self) -> int:
        return self._free_pages

    @property
    def used_pages(self) -> int:
        return self._total_pages - self._free_pages

    def _index_of(self, addr) -> "int | None":
        if not addr or addr < self._range_start or addr >= self._range_end:
            return None
        delta = addr - self._range_start
        if delta & _PAGE_MASK:
            return None
        index = delta // PAGE_SIZE
        if index >= self._total_pages:
            return None
        return index

    def alloc(self) -> int:
        """Return the address of a free page; raise MemoryError when none is left."""
        if self._free_pages == 0:
            raise MemoryError("no free pages")

        total = self._total_pages
        for scanned in range(total):
            index = (self._next_hint + scanned) % total
            if self._used[index]:
                continue
            self._used[index] = 1
            self._free_pages -= 1
            self._next_hint = (index + 1) % total
            return self._range_start + index * PAGE_SIZE

        raise MemoryError("no free pages")

    def owns(self, page) -> bool:
        """True if page is a page-aligned address inside the managed range."""
        return self._index_of(page) is not None

    def free(self, page) -> None:
        """Return an allocated page; raise ValueError for foreign or free pages."""
        index = self._index_of(page)
        if index is None:
            raise ValueError(f"not a managed page: {page!r}")
        if not self._used[index]:
            raise ValueError(f"page is not allocated: {page:#x}")

        self._used[index] = 0
        self._free_pages += 1
        if index < self._next_hint or self._free_pages == 1:
            self._next_hint = index