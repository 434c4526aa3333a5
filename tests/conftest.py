import json

import pytest

from unicodesearch.normalizer import normalize_all
from unicodesearch.parser import parse_emoji_test

SAMPLE_EMOJI_TEST = """\
# emoji-test.txt
# This file provides data for testing which emoji forms should be in keyboards.
# Version: 15.1

# group: Smileys & Emotion

# subgroup: face-smiling
1F600                                                  ; fully-qualified     # 😀 E1.0 grinning face
1F603                                                  ; fully-qualified     # 😃 E0.6 grinning face with big eyes
263A FE0F                                              ; fully-qualified     # ☺️ E0.6 smiling face
263A                                                   ; unqualified         # ☺ E0.6 smiling face

# subgroup: cat-face
1F63A                                                  ; fully-qualified     # 😺 E0.6 grinning cat

# group: People & Body

# subgroup: person
1F469 1F3FC                                            ; fully-qualified     # 👩🏼 E1.0 woman: medium-light skin tone
this line is broken
1F44D 1F3FD                                            ; fully-qualified     # 👍🏽 E1.0 thumbs up: medium skin tone

# subgroup: skin-tone
1F3FB                                                  ; component           # 🏻 E1.0 light skin tone

#EOF
"""

SAMPLE_GEMOJI = [
    {"emoji": "😀", "description": "grinning face", "aliases": ["grinning"], "tags": ["smile", "happy"]},
    {"emoji": "😺", "description": "grinning cat", "aliases": ["smiley_cat"], "tags": []},
    {"emoji": "🦄", "description": "unicorn", "aliases": ["unicorn"], "tags": []},
]


@pytest.fixture
def emoji_test_text():
    return SAMPLE_EMOJI_TEST


@pytest.fixture
def raw_records():
    records, _ = parse_emoji_test(SAMPLE_EMOJI_TEST)
    return records


@pytest.fixture
def records(raw_records):
    return normalize_all(raw_records)


@pytest.fixture
def dataset_document(raw_records):
    return {
        "success": True,
        "lastmod": "2024-09-10T00:00:00+00:00",
        "data": [record.to_dict() for record in raw_records],
    }


@pytest.fixture
def dataset_file(tmp_path, dataset_document):
    path = tmp_path / "emoji.json"
    path.write_text(json.dumps(dataset_document, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def gemoji_file(tmp_path):
    path = tmp_path / "gemoji.json"
    path.write_text(json.dumps(SAMPLE_GEMOJI, ensure_ascii=False), encoding="utf-8")
    return path
