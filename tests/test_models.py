import pytest

from stock_dashboard.models import DetailBundle, HistoricalSeries, Period, Quote


def test_change_is_derived():
    quote = Quote(symbol="AAPL", price=110.0, previous_close=100.0)

    assert quote.change == pytest.approx(10.0)
    assert quote.change_percent == pytest.approx(10.0)
    assert quote.is_up


def test_change_cannot_be_supplied():
    with pytest.raises(TypeError):
        Quote(symbol="AAPL", price=1.0, previous_close=1.0, change=5.0)


def test_missing_inputs_leave_change_undefined():
    quote = Quote(symbol="AAPL", price=None, previous_close=100.0)

    assert quote.change is None
    assert quote.change_percent is None
    assert not quote.is_up


def test_zero_previous_close_leaves_percent_undefined():
    quote = Quote(symbol="X", price=5.0, previous_close=0.0)

    assert quote.change == 5.0
    assert quote.change_percent is None


def test_long_name_defaults_to_symbol():
    assert Quote(symbol="MSFT", price=1.0, previous_close=1.0).long_name == "MSFT"


def test_series_rejects_misaligned_arrays():
    with pytest.raises(ValueError):
        HistoricalSeries(timestamps=[1, 2, 3], closes=[1.0, 2.0])


def test_series_pads_missing_columns():
    series = HistoricalSeries(timestamps=[1, 2], closes=[1.0, 2.0])

    assert series.volumes == [None, None]
    assert len(series) == 2


def test_dropna_filters_all_columns_together():
    series = HistoricalSeries(
        timestamps=[100, 200, 300, 400],
        closes=[10.0, None, 12.0, float("nan")],
        opens=[9.0, None, 11.0, None],
        highs=[11.0, None, 13.0, None],
        lows=[8.0, None, 10.0, None],
        volumes=[1000, None, 3000, None],
        period=Period.FIVE_DAY,
    )

    clean = series.dropna()

    assert clean.timestamps == [100, 300]
    assert clean.closes == [10.0, 12.0]
    assert clean.opens == [9.0, 11.0]
    assert clean.volumes == [1000, 3000]
    assert clean.period is Period.FIVE_DAY
    # input series is not modified
    assert len(series) == 4


def test_to_frame():
    series = HistoricalSeries(timestamps=[1700000000, 1700086400], closes=[1.5, None])

    df = series.to_frame()

    assert list(df.columns) == ["open", "high", "low", "close", "volume"]
    assert df.index.tz is not None
    assert df["close"].iloc[0] == 1.5
    assert df["close"].isna().iloc[1]


@pytest.mark.parametrize("label,period", [
    ("1D", Period.INTRADAY),
    ("5D", Period.FIVE_DAY),
    ("1M", Period.ONE_MONTH),
    ("3M", Period.THREE_MONTH),
    ("1Y", Period.ONE_YEAR),
    ("10Y", Period.ONE_MONTH),
])
def test_period_from_label(label, period):
    assert Period.from_label(label) is period


def test_empty_detail_bundle():
    details = DetailBundle.empty()

    assert details.is_empty
    assert details.get("summaryDetail") == {}
    assert details.raw("summaryDetail", "dayHigh") is None


def test_detail_raw_unwraps_values():
    details = DetailBundle({"summaryDetail": {"dayHigh": {"raw": 12.5, "fmt": "12.50"}, "beta": 1.2}})

    assert not details.is_empty
    assert details.raw("summaryDetail", "dayHigh") == 12.5
    assert details.raw("summaryDetail", "beta") == 1.2
    assert details.raw("financialData", "currentPrice") is None
