"""Property-based tests for DuplicationConfig using Hypothesis.

Only "save" (in any case, with surrounding whitespace) selects the save
strategy; every other value falls back to the form strategy.
"""

from hypothesis import given
from hypothesis import strategies as st

from admin_duplicatable.config import VALID_REDIRECT_STATUSES, DuplicationConfig
from admin_duplicatable.models import DuplicationStrategy

# Strategy for every casing of "save", padded with whitespace
save_spelling_strategy = st.tuples(
    st.text(alphabet=" \t", max_size=3),
    st.lists(st.booleans(), min_size=4, max_size=4),
    st.text(alphabet=" \t", max_size=3),
).map(
    lambda parts: parts[0]
    + "".join(c.upper() if up else c for c, up in zip("save", parts[1]))
    + parts[2]
)

# Strategy for arbitrary non-save values
other_value_strategy = st.one_of(
    st.text().filter(lambda s: s.strip().lower() != "save"),
    st.integers(),
    st.none(),
    st.booleans(),
    st.lists(st.text(), max_size=3),
)


@given(save_spelling_strategy)
def test_any_spelling_of_save_selects_save(value: str) -> None:
    assert DuplicationConfig(via=value).via is DuplicationStrategy.SAVE


@given(other_value_strategy)
def test_anything_else_selects_form(value: object) -> None:
    assert DuplicationConfig(via=value).via is DuplicationStrategy.FORM


@given(other_value_strategy)
def test_parse_matches_config(value: object) -> None:
    assert DuplicationStrategy.parse(value) is DuplicationConfig(via=value).via


@given(st.integers(min_value=100, max_value=599))
def test_redirect_status_accepted_iff_redirect(status: int) -> None:
    try:
        config = DuplicationConfig(redirect_status=status)
    except ValueError:
        assert status not in VALID_REDIRECT_STATUSES
    else:
        assert config.redirect_status in VALID_REDIRECT_STATUSES
