from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutSignals:
    """Layout measurements taken from raw (un-normalized) résumé text."""

    total_lines: int
    empty_lines: int
    has_table_chars: bool
    pipe_table_lines: int
    wide_spacing_lines: int
    wide_gap_lines: int
    decorative_chars: int

    @property
    def has_tables(self) -> bool:
        return self.has_table_chars or self.pipe_table_lines > 3

    @property
    def has_wide_spacing(self) -> bool:
        return self.wide_spacing_lines > self.total_lines * 0.15

    @property
    def has_column_gaps(self) -> bool:
        # 5+ whitespace runs only; a lone double tab does not look like columns
        return self.wide_gap_lines > self.total_lines * 0.15

    @property
    def has_decorations(self) -> bool:
        return self.decorative_chars > 10

    @property
    def mostly_empty(self) -> bool:
        return self.empty_lines > self.total_lines * 0.4
