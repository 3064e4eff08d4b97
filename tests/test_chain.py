from ghostfetch.chain import first_of


def test_first_non_empty_answer_wins() -> None:
    calls = []

    def source(name, value):
        def strategy():
            calls.append(name)
            return value

        return strategy

    result = first_of([source("a", None), source("b", ""), source("c", "found"), source("d", "late")])
    assert result == "found"
    assert calls == ["a", "b", "c"]


def test_default_when_nothing_answers() -> None:
    assert first_of([lambda: None, lambda: []]) is None
    assert first_of([lambda: None], default="Unknown") == "Unknown"
    assert first_of([], default=0.0) == 0.0
