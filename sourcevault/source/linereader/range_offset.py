"""Projects a multi-line text range onto a single line."""

from sourcevault.exceptions import RangeOffsetConverterError
from sourcevault.report.models import TextRange

OFFSET_SEPARATOR = ","
SYMBOLS_SEPARATOR = ";"


class RangeOffsetConverter:
    def offset_to_string(self, text_range: TextRange, line: int, line_length: int) -> str:
        """Return "start,end" of the part of the range on this line.

        Lines the range only passes through get the whole line. An empty
        projection returns "".

        Raises:
            RangeOffsetConverterError: If the range is inconsistent with the line
        """
        self._validate_offset_order(text_range, line)
        self._validate_start_offset(text_range, line, line_length)
        self._validate_end_offset(text_range, line, line_length)

        start_offset = text_range.start_offset if text_range.start_line == line else 0
        end_offset = text_range.end_offset if text_range.end_line == line else line_length

        if start_offset < end_offset:
            return f"{start_offset}{OFFSET_SEPARATOR}{end_offset}"
        return ""

    @staticmethod
    def _validate_offset_order(text_range: TextRange, line: int) -> None:
        if text_range.start_line == text_range.end_line and text_range.start_offset > text_range.end_offset:
            raise RangeOffsetConverterError(
                f"End offset {text_range.end_offset} cannot be defined before start offset "
                f"{text_range.start_offset} on line {line}"
            )

    @staticmethod
    def _validate_start_offset(text_range: TextRange, line: int, line_length: int) -> None:
        if text_range.start_line == line and text_range.start_offset > line_length:
            raise RangeOffsetConverterError(
                f"Start offset {text_range.start_offset} is defined outside the length "
                f"({line_length}) of the line {line}"
            )

    @staticmethod
    def _validate_end_offset(text_range: TextRange, line: int, line_length: int) -> None:
        if text_range.end_line == line and text_range.end_offset > line_length:
            raise RangeOffsetConverterError(
                f"End offset {text_range.end_offset} is defined outside the length "
                f"({line_length}) of the line {line}"
            )
