"""
Fixtures and test configuration for the ephemdata test suite.
"""

import gzip
import io
import tempfile
import zipfile
from pathlib import Path
from typing import List

import pytest

from ephemdata.data import DataLoader
from ephemdata.settings import Settings

RESOURCES = Path(__file__).parent / "resources"

# "Orekit" compressed by Unix compress, 16 bits codes, block mode
OREKIT_Z = bytes([0x1F, 0x9D, 0x90, 0x4F, 0xE4, 0x94, 0x59, 0x93, 0x86, 0x0E])


def lzw_compress(data: bytes, max_bits: int = 16, block_mode: bool = True,
                 clear_when_full: bool = False) -> bytes:
    """
    Compress data the way Unix compress does.

    Codes are packed least significant bit first, in groups of eight codes.
    The current group is padded when the code width changes or when the
    dictionary is cleared.
    """
    out = bytearray(b"\x1f\x9d")
    out.append(max_bits | (0x80 if block_mode else 0))
    if not data:
        return bytes(out)

    first = 257 if block_mode else 256
    max_entries = 1 << max_bits
    state = {"acc": 0, "bits": 0, "in_group": 0, "n_bits": 9}

    def pad_group():
        if state["in_group"]:
            state["bits"] += (8 - state["in_group"]) * state["n_bits"]
            state["in_group"] = 0

    def emit(code):
        state["acc"] |= code << state["bits"]
        state["bits"] += state["n_bits"]
        state["in_group"] = (state["in_group"] + 1) % 8

    table = {bytes([i]): i for i in range(256)}
    free_ent = first
    prefix = data[:1]
    for byte in data[1:]:
        candidate = prefix + bytes([byte])
        if candidate in table:
            prefix = candidate
            continue

        emit(table[prefix])
        # decoder learns about the width change one code late
        if free_ent > (1 << state["n_bits"]) - 1 and state["n_bits"] < max_bits:
            pad_group()
            state["n_bits"] += 1

        if free_ent < max_entries:
            table[candidate] = free_ent
            free_ent += 1
        elif block_mode and clear_when_full:
            emit(256)
            pad_group()
            state["n_bits"] = 9
            table = {bytes([i]): i for i in range(256)}
            free_ent = first
        prefix = bytes([byte])

    emit(table[prefix])
    out += state["acc"].to_bytes((state["bits"] + 7) // 8, "little")
    return bytes(out)


class CollectingLoader(DataLoader):
    """Loader recording the name and content of everything it is fed."""

    def __init__(self, max_items: int = 0):
        self.max_items = max_items
        self.names: List[str] = []
        self.contents: List[bytes] = []

    def still_accepts_data(self) -> bool:
        return self.max_items <= 0 or len(self.names) < self.max_items

    def load_data(self, stream, name):
        self.contents.append(stream.read())
        self.names.append(name)


class FailingLoader(DataLoader):
    """Loader raising a given exception on first use."""

    def __init__(self, error: Exception):
        self.error = error

    def still_accepts_data(self) -> bool:
        return True

    def load_data(self, stream, name):
        raise self.error


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def test_settings(temp_dir):
    """Create test settings pointing at the temporary directory."""
    return Settings(
        data_path=str(temp_dir),
        log_level="debug",
        request_timeout=30,
    )


@pytest.fixture
def resources_dir():
    return RESOURCES


@pytest.fixture
def utc_tai_history():
    return RESOURCES / "UTC-TAI.history"


def _zip_bytes(entries) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in entries.items():
            archive.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture
def data_tree(temp_dir):
    """
    Directory holding six .txt data sources, some compressed, some in
    nested archives, plus files that must not match ``\\.txt$``.

    root/
      a.txt
      notes.md
      sub/b.txt
      sub/c.txt.gz
      sub/deeper/UTC-TAI.history
      archive.zip: d.txt, inner/e.txt, skip.dat, nested.zip (f.txt.Z, other.csv)
    """
    root = temp_dir / "data"
    (root / "sub" / "deeper").mkdir(parents=True)

    (root / "a.txt").write_bytes(b"content of a\n")
    (root / "notes.md").write_bytes(b"# not data\n")
    (root / "sub" / "b.txt").write_bytes(b"content of b\n")
    (root / "sub" / "c.txt.gz").write_bytes(gzip.compress(b"content of c\n"))
    (root / "sub" / "deeper" / "UTC-TAI.history").write_bytes(
        (RESOURCES / "UTC-TAI.history").read_bytes()
    )

    nested = _zip_bytes({
        "f.txt.Z": lzw_compress(b"content of f\n"),
        "other.csv": b"1,2,3\n",
    })
    (root / "archive.zip").write_bytes(_zip_bytes({
        "d.txt": b"content of d\n",
        "inner/e.txt": b"content of e\n",
        "skip.dat": b"binary\x00data",
        "nested.zip": nested,
    }))
    return root


@pytest.fixture
def extract_table():
    """Poisson series table with 9 lines merging into 5 terms."""
    return (
        "Expression for the X coordinate of the CIP in the GCRS based on the IAU2000A\n"
        "precession-nutation model\n"
        "\n"
        "\n"
        "----------------------------------------------------------------------\n"
        "\n"
        "X = polynomial part + non-polynomial part\n"
        "\n"
        "----------------------------------------------------------------------\n"
        "\n"
        "Polynomial part (unit microarcsecond)\n"
        "\n"
        "  -16616.99 + 2004191742.88 t - 427219.05 t^2 - 198620.54 t^3 - 46.05 t^4 + 5.98 t^5\n"
        "\n"
        "----------------------------------------------------------------------\n"
        "\n"
        "Non-polynomial part (unit microarcsecond)\n"
        "(ARG being for various combination of the fundamental arguments of the nutation theory)\n"
        "\n"
        "  Sum_i[a_{s,0})_i * sin(ARG) + a_{c,0})_i * cos(ARG)] \n"
        "\n"
        "+ Sum_i)j=1,4 [a_{s,j})_i * t^j * sin(ARG) + a_{c,j})_i * cos(ARG)] * t^j]\n"
        "\n"
        "The Table below provides the values for a_{s,j})_i and a_{c,j})_i\n"
        "\n"
        "The expressions for the fundamental arguments appearing in columns 4 to 8 (luni-solar part) \n"
        "and in columns 6 to 17 (planetary part) are those of the IERS Conventions 2000\n"
        "\n"
        "----------------------------------------------------------------------\n"
        "\n"
        "    i    a_{s,j})_i      a_{c,j})_i    l    l'   F    D   Om L_Me L_Ve  L_E L_Ma  L_J L_Sa  L_U L_Ne  p_A\n"
        "\n"
        "----------------------------------------------------------------------\n"
        "-16616.99 + 2004191742.88 t - 427219.05 t^2 - 198620.54 t^3 - 46.05 t^4 + 5.98 t^5\n"
        "j = 0  Nb of terms = 2\n"
        "\n"
        "   1    -6844318.44        1328.67    0    0    0    0    1    0    0    0    0    0    0    0    0    0\n"
        "   2           0.11           0.00    0    0    4   -4    4    0    0    0    0    0    0    0    0    0\n"
        "\n"
        "j = 1  Nb of terms = 2\n"
        "\n"
        "   3       -3328.48      205833.15    0    0    0    0    1    0    0    0    0    0    0    0    0    0\n"
        "   4           0.00          -0.10    1   -1   -2   -2   -1    0    0    0    0    0    0    0    0    0\n"
        "\n"
        " j = 2  Nb of terms = 2\n"
        "\n"
        "   5        2038.00          82.26    0    0    0    0    1    0    0    0    0    0    0    0    0    0\n"
        "   6          -0.12           0.00    1    0   -2   -2   -1    0    0    0    0    0    0    0    0    0\n"
        "  \n"
        " j = 3  Nb of terms = 2\n"
        "\n"
        "   7           1.76         -20.39    0    0    0    0    1    0    0    0    0    0    0    0    0    0\n"
        "   8           0.00           0.20    0    0    0    0    2    0    0    0    0    0    0    0    0    0\n"
        "\n"
        " j = 4  Nb of terms = 1\n"
        "       \n"
        "   9          -0.10          -0.02    0    0    0    0    1    0    0    0    0    0    0    0    0    0\n"
    )
