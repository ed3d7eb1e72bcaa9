"""
Parse configuration tests.
"""

import dataclasses

import pytest

import jleaf


def test_defaults() -> None:
    """
    Validates the default configuration is permissive and recursive.
    """
    config = jleaf.ParseConfig()

    assert config.strict is False
    assert config.duplicate_keys is jleaf.DuplicateKeyPolicy.LAST_WINS
    assert config.strategy is jleaf.ParseStrategy.RECURSIVE


def test_config_is_immutable() -> None:
    config = jleaf.ParseConfig()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.strict = True  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs,match",
    [
        ({"strict": 1}, "strict must be a boolean"),
        ({"duplicate_keys": "last_wins"}, "DuplicateKeyPolicy"),
        ({"strategy": "single_pass"}, "ParseStrategy"),
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, object], match: str) -> None:
    """
    Validates configuration values are type checked on construction.
    """
    with pytest.raises(TypeError, match=match):
        jleaf.ParseConfig(**kwargs)  # type: ignore[arg-type]

    with pytest.raises(TypeError, match=match):
        jleaf.parse("{}", **kwargs)


def test_unknown_option_rejected() -> None:
    with pytest.raises(TypeError):
        jleaf.parse("{}", object_hook=dict)
