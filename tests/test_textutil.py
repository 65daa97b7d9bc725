import pytest

from guildhall.textutil import TickCounter, fit_text, json_field, parse_json


def test_parse_json_and_field():
    data = parse_json('{"name": "orc", "hp": 40}')
    assert json_field("name", data) == "orc"
    assert json_field("hp", data) == 40


def test_json_field_missing_raises():
    with pytest.raises(KeyError):
        json_field("absent", parse_json('{"a": 1}'))


def test_json_field_null_raises():
    with pytest.raises(ValueError):
        json_field("a", parse_json('{"a": null}'))


def test_tick_counter_wraps_after_period():
    counter = TickCounter(5)
    values = [counter.add() for _ in range(5)]
    assert values[-1] == 0
    assert values[:-1] == [1, 2, 3, 4]
    assert counter.tick == values[-1]


def test_tick_counter_stays_in_range():
    counter = TickCounter(7)
    for step in (1, 3, 10, 6):
        result = counter.add(step)
        assert 0 <= result < counter.period


def test_reset_to_minus_one_then_add_starts_at_zero():
    counter = TickCounter(4)
    counter.add(2)
    counter.reset()
    assert counter.tick == -1
    assert counter.add() == 0


def test_reset_to_value():
    counter = TickCounter(4)
    counter.reset(3)
    assert counter.tick == 3


def test_tick_counter_zero_period_rejected():
    with pytest.raises(ValueError):
        TickCounter(0)


def test_fit_text_short_text_unchanged():
    assert fit_text("Knight", 10) == "Knight"


def test_fit_text_cuts_long_text():
    result = fit_text("abcdefghijklmnop", 10)
    assert len(result) == 9
    assert "abcdefghijklmnop".startswith(result)


def test_fit_text_bad_size():
    with pytest.raises(ValueError):
        fit_text("x", 0)