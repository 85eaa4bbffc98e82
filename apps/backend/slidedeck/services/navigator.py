from __future__ import annotations


class Navigator:
    """Slide position in `1..slide_count`. Requests past either end saturate."""

    def __init__(self, slide_count: int) -> None:
        slide_count = int(slide_count)
        if slide_count < 1:
            raise ValueError(f"slide_count must be >= 1, got {slide_count}")
        self.slide_count = slide_count
        self.current_index = 1

    def advance(self, step: int) -> int:
        if step not in (1, -1):
            raise ValueError(f"step must be +1 or -1, got {step!r}")
        self.current_index = max(1, min(self.slide_count, self.current_index + step))
        return self.current_index

    def next(self) -> int:
        return self.advance(1)

    def previous(self) -> int:
        return self.advance(-1)

    @property
    def at_first(self) -> bool:
        return self.current_index == 1

    @property
    def at_last(self) -> bool:
        return self.current_index == self.slide_count
