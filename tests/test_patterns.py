import pytest

from kubetagger.utils.patterns import BadPatternError, path_match, translate


@pytest.mark.parametrize("pattern, name, expected", [
    ("*", "app", True),
    ("*", "app.kubernetes.io/name", False),
    ("app.kubernetes.io/*", "app.kubernetes.io/name", True),
    ("*/*", "app.kubernetes.io/name", True),
    ("team*", "team-owner", True),
    ("team*", "my-team", False),
    ("?pp", "app", True),
    ("?pp", "/pp", False),
    ("a?p", "a/p", False),
    ("[a-c]pp", "bpp", True),
    ("[a-c]pp", "dpp", False),
    ("[^a-c]pp", "dpp", True),
    ("[^a-c]pp", "app", False),
    ("\\*", "*", True),
    ("\\*", "app", False),
    ("app", "app", True),
    ("app", "apps", False),
    ("", "", True),
    ("", "app", False),
])
def test_path_match(pattern, name, expected):
    assert path_match(pattern, name) is expected


@pytest.mark.parametrize("pattern", ["[app", "[]", "app\\", "[z-a]", "[a-]"])
def test_malformed_patterns_never_match(pattern):
    with pytest.raises(BadPatternError):
        translate(pattern)
    assert path_match(pattern, "app") is False
    assert path_match(pattern, pattern) is False
