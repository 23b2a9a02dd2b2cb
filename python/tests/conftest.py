"""Pytest configuration and fixtures."""

import pytest
import sys
import tempfile
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from wnconv.sense_index import SenseIndex

LICENSE_HEADER = """\
  1 This software and database is being provided to you, the LICENSEE, by
  2 Princeton University under the following license.
"""

# A miniature dictionary directory, consistent across file classes
SAMPLE_FILES = {
    "index.noun": LICENSE_HEADER + """\
boot n 3 2 @ ~ 3 1 05675987 08477634 09937278
entity n 1 1 ~ 1 1 00001740
""",
    "index.verb": LICENSE_HEADER + """\
breathe v 1 2 @ ~ 1 1 00002325
""",
    "index.adj": LICENSE_HEADER + """\
able a 1 1 = 1 1 00001740
gorgeous a 1 1 & 1 1 00217728
""",
    "index.adv": LICENSE_HEADER + """\
barely r 1 0 1 0 00002999
""",
    "noun.exc": "geese goose\nboots boot\n",
    "verb.exc": "breathed breathe\n",
    "adj.exc": "better good well\n",
    "adv.exc": "best well\n",
    "cousin.exc": "acquisitive acquire\n",
    "data.noun": LICENSE_HEADER + """\
00001740 03 n 01 entity 0 001 ~ 05675987 n 0000 | that which is perceived or known or inferred to have its own distinct existence
05675987 04 n 01 boot 0 001 @ 00001740 n 0000 | the act of delivering a blow with the foot
08477634 06 n 01 boot 1 000 | footwear that covers the whole foot and lower leg
09937278 06 n 01 boot 2 000 | the swift release of a store of affective force
""",
    "data.verb": LICENSE_HEADER + """\
00002325 29 v 01 breathe 0 000 02 + 02 00 + 08 00 | draw air into, and expel out of, the lungs
""",
    "data.adj": LICENSE_HEADER + """\
00001740 00 a 01 able 0 000 | (usually followed by `to') having the necessary means or skill
00217728 00 s 01 gorgeous(a) 0 001 & 00001740 a 0000 | dazzlingly beautiful
""",
    "data.adv": LICENSE_HEADER + """\
00002999 02 r 01 barely 0 000 | only just
""",
}


def write_dict_dir(directory: Path, files: dict[str, str]) -> Path:
    """Write dictionary files into directory."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (directory / name).write_text(content, encoding="utf-8")
    return directory


@pytest.fixture
def dict_dir():
    """A complete miniature WordNet dict directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield write_dict_dir(Path(tmpdir) / "dict", SAMPLE_FILES)


@pytest.fixture
def db_path():
    """Path for a fresh lexicon database."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "build" / "lexicon.db"


@pytest.fixture
def sense_index():
    """A frozen sense index holding the senses of SAMPLE_FILES."""
    index = SenseIndex()
    index.register("05675987", "n", "boot", 0)
    index.register("08477634", "n", "boot", 1)
    index.register("09937278", "n", "boot", 2)
    index.register("00001740", "n", "entity", 0)
    index.register("00002325", "v", "breathe", 0)
    index.register("00001740", "a", "able", 0)
    index.register("00217728", "a", "gorgeous", 0)
    index.freeze()
    return index


@pytest.fixture
def sample_index_line():
    """Index line for 'boot' with three senses."""
    return "boot n 3 2 @ ~ 3 1 05675987 08477634 09937278  "


@pytest.fixture
def sample_verb_line():
    """Data line for a verb synset with two frames."""
    return (
        "00002325 29 v 01 breathe 0 000 02 + 02 00 + 08 00 "
        "| draw air into, and expel out of, the lungs  "
    )
