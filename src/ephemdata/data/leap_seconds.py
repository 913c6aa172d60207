"""
Loader for the ``UTC-TAI.history`` leap seconds file.
"""

import io
import logging
import re
from datetime import date
from typing import BinaryIO, List, Optional

from pydantic import BaseModel

from ..errors import LineParseError, UnsupportedFormatError
from .loader import DataLoader

logger = logging.getLogger(__name__)

DEFAULT_SUPPORTED_NAMES = r"^UTC-TAI\.history$"

MJD_EPOCH = date(1858, 11, 17)

MONTHS = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}

# digits may be grouped by single spaces, as in "1.422 818 0"
_NUMBER = r"\d+(?: \d+)*(?:\.\d+(?: \d+)*)?"
_DATE = r"(?:(\d{4})\s+)?([A-Z][a-z]{2})\.?\s+(\d{1,2})"
_LINE = re.compile(
    rf"^\s*{_DATE}\s*-\s*(?:{_DATE})?\s+({_NUMBER})\s*s"
    rf"(?:\s*\+\s*(?:\(\s*MJD\s*-\s*({_NUMBER})\s*\)\s*x\s*({_NUMBER})\s*s|\"\"(?:\s*\"\")?))?\s*$"
)
_DATA_START = re.compile(r"^\s*(?:\d{4}\s+)?[A-Z][a-z]{2}\.?\s+\d")


class LeapSecondEntry(BaseModel):
    """
    One validity interval of the UTC-TAI offset.

    The offset in seconds is ``offset + (MJD - mjd_reference) * drift``.
    """

    start: date
    end: Optional[date] = None
    offset: float
    mjd_reference: float = 0.0
    drift: float = 0.0

    def offset_at(self, day: date) -> float:
        mjd = (day - MJD_EPOCH).days
        return self.offset + (mjd - self.mjd_reference) * self.drift


def _number(text: str) -> float:
    return float(text.replace(" ", ""))


class UTCTAIHistoryLoader(DataLoader):
    """
    Loader producing the list of UTC-TAI offsets.

    A missing year repeats the year of the previous date, and a ``""`` drift
    repeats the drift of the previous line.
    """

    def __init__(self, supported_names: str = DEFAULT_SUPPORTED_NAMES):
        self.supported_names = supported_names
        self.entries: List[LeapSecondEntry] = []

    def still_accepts_data(self) -> bool:
        return not self.entries

    def load_data(self, stream: BinaryIO, name: str) -> None:
        reader = io.TextIOWrapper(stream, encoding="utf-8")
        try:
            self.entries = self._parse(reader, name)
        finally:
            # leave the stream to its owner
            reader.detach()
        logger.info(f"Loaded {len(self.entries)} UTC-TAI entries from {name}")

    def _parse(self, reader, name: str) -> List[LeapSecondEntry]:
        entries: List[LeapSecondEntry] = []
        year: Optional[int] = None
        mjd_reference = 0.0
        drift = 0.0

        for line_number, line in enumerate(reader, start=1):
            line = line.rstrip("\r\n")
            match = _LINE.match(line)
            if match is None:
                if _DATA_START.match(line):
                    raise LineParseError(line_number, name, line)
                continue

            groups = match.groups()
            try:
                start_year = int(groups[0]) if groups[0] else year
                if start_year is None:
                    raise ValueError("missing year")
                start = date(start_year, MONTHS[groups[1]], int(groups[2]))
                end = None
                if groups[4]:
                    end_year = int(groups[3]) if groups[3] else start_year
                    end = date(end_year, MONTHS[groups[4]], int(groups[5]))
                    year = end_year
                else:
                    year = start_year
            except (KeyError, ValueError) as e:
                raise LineParseError(line_number, name, line) from e

            offset = _number(groups[6])
            if groups[7] is not None:
                mjd_reference = _number(groups[7])
                drift = _number(groups[8])
            elif "+" not in line[match.end(7):]:
                mjd_reference = 0.0
                drift = 0.0

            if entries:
                previous = entries[-1]
                if previous.end is None or previous.end != start:
                    raise LineParseError(line_number, name, line)
            if end is not None and end <= start:
                raise LineParseError(line_number, name, line)

            entries.append(
                LeapSecondEntry(
                    start=start,
                    end=end,
                    offset=offset,
                    mjd_reference=mjd_reference,
                    drift=drift,
                )
            )

        if not entries:
            raise UnsupportedFormatError(f"no entries found in UTC-TAI history file {name}", name)
        return entries
