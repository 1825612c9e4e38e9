import pytest
from pydantic import ValidationError

from psiagenda.config import Settings


def test_series_length_defaults_to_twelve():
    assert Settings().SERIES_TOTAL_OCCURRENCES == 12


@pytest.mark.parametrize("value", [0, -3])
def test_series_length_must_include_the_base(value):
    with pytest.raises(ValidationError):
        Settings(SERIES_TOTAL_OCCURRENCES=value)


def test_series_length_from_environment(monkeypatch):
    monkeypatch.setenv("SERIES_TOTAL_OCCURRENCES", "0")
    with pytest.raises(ValidationError):
        Settings()
    monkeypatch.setenv("SERIES_TOTAL_OCCURRENCES", "4")
    assert Settings().SERIES_TOTAL_OCCURRENCES == 4
