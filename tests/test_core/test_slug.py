# tests/test_core/test_slug.py

from wildseries.utils.slug import PROGRAM_RESERVED_SLUGS, generate_slug, has_slug


def test_lowercases_and_hyphenates():
    assert generate_slug("Walking Dead") == "walking-dead"


def test_transliterates_accents_and_drops_punctuation():
    assert generate_slug("L'Été  des Zombies !") == "l-ete-des-zombies"


def test_same_title_same_slug():
    assert generate_slug("Penny Dreadful") == generate_slug("Penny Dreadful")


def test_empty_title_gives_empty_slug():
    assert generate_slug("") == ""
    assert generate_slug(None) == ""


def test_punctuation_only_title_has_no_slug():
    assert generate_slug("!!!") == ""
    assert not has_slug("!!!")
    assert has_slug("24")


def test_reserved_slug_gets_suffix():
    assert generate_slug("New", reserved=PROGRAM_RESERVED_SLUGS) == "new-1"
    assert generate_slug("New Girl", reserved=PROGRAM_RESERVED_SLUGS) == "new-girl"
    assert generate_slug("New") == "new"
