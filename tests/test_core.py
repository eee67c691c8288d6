# tests/test_core.py — tanker core
import pytest

import tanker_core as core
from aircraft_limits import AircraftLimits, get_limits, limits_for_variant

CEO_A320 = get_limits("CEO", "A320")


def panel(variant="CEO", model="A320", **fields):
    return core.compute_panel(core.CalculatorInput(**fields), get_limits(variant, model))


# ---- unit normalization ----

@pytest.mark.parametrize("text, expected", [
    ("", 0.0),
    (None, 0.0),
    ("abc", 0.0),
    ("-", 0.0),
    ("1,5", 1.5),
    ("1.5", 1.5),
    ("  7.25 ", 7.25),
    ("12abc", 12.0),
    ("1,5,3", 1.5),
    ("1.2.3", 1.2),
    (".5", 0.5),
    ("-3", -3.0),
    ("1e3", 1000.0),
    (42, 42.0),
    ("٣", 0.0),
    ("３", 0.0),
    ("7٣", 7.0),
])
def test_parse_decimal(text, expected):
    assert core.parse_decimal(text) == pytest.approx(expected)


def test_parse_decimal_non_finite_is_zero():
    assert core.parse_decimal(float("nan")) == 0.0
    assert core.parse_decimal(float("inf")) == 0.0


def test_taxi_heuristic_edges():
    assert core.normalize_taxi_to_kg(core.parse_decimal("9.999")) == pytest.approx(9999)
    assert core.normalize_taxi_to_kg(core.parse_decimal("10")) == 10
    assert core.normalize_taxi_to_kg(core.parse_decimal("0.2")) == pytest.approx(200)
    assert core.normalize_taxi_to_kg(0.0) == 0.0
    assert core.normalize_taxi_to_kg(250.0) == 250.0
    assert core.normalize_taxi_to_kg(-0.5) == -0.5


def test_limit_normalization():
    assert core.normalize_limit_to_kg(77) == 77000
    assert core.normalize_limit_to_kg(999.9) == pytest.approx(999900)
    assert core.normalize_limit_to_kg(1000) == 1000
    assert core.normalize_limit_to_kg(66000) == 66000
    assert core.normalize_limits(AircraftLimits(77.0, 66.0)) == AircraftLimits(77000, 66000)


def test_round_half_up():
    assert core.round_kg(2.5) == 3
    assert core.round_kg(0.5) == 1
    assert core.round_kg(2.4999) == 2
    assert core.round_kg(-6000.5) == -6000
    assert core.round_kg(-0.4) == 0


# ---- weight calculation ----

def test_tow_is_zfw_plus_all_fuel():
    n = core.normalize_input(core.CalculatorInput(taxi="0,3", sector4="1000", sector3="2000",
                                                  sector2="1500", sector1="3000", zfw="58000"))
    w = core.compute_weights(n)
    assert w.tanker_fuel_kg == 7800
    assert w.tow_kg == 65800


def test_lwg_uses_rounded_tow():
    res = panel(zfw="100", trip_plus_taxi="0.6")
    assert res.tow_kg == 100
    assert res.lwg_kg == 99


def test_rounding_is_progressive():
    # 0.4 + 0.4 would round to 1 if rounded only once at the end
    res = panel(sector1="0.4", zfw="0.4")
    assert res.tanker_fuel_kg == 0
    assert res.tow_kg == 0


def test_tanker_rounds_half_up():
    assert panel(sector1="2.5").tanker_fuel_kg == 3


# ---- limit evaluation ----

def test_end_to_end_ceo_a320():
    res = panel(taxi="0.2", sector4="0", sector3="0", sector2="0", sector1="9000",
                zfw="60000", trip_plus_taxi="9200")
    assert res.tanker_fuel_kg == 9200
    assert res.tow_kg == 69200
    assert res.lwg_kg == 60000
    assert res.mlw_delta_kg == -6000
    assert res.tank_allowed_kg == 15200
    assert res.delta_reduce_zfw_kg == -6000
    assert res.limiter == "MLW"
    assert not res.tow_exceeds
    assert not res.lwg_exceeds
    assert not res.tank_exceeds


def test_tow_exceedance_is_flagged_not_raised():
    res = panel(sector4="2000", sector3="2000", sector2="2000", sector1="3000",
                zfw="70000", trip_plus_taxi="8000")
    assert res.tow_kg == 79000
    assert res.tow_exceeds
    assert res.lwg_kg == 71000
    assert res.lwg_exceeds
    assert res.mlw_delta_kg == 5000
    assert res.delta_reduce_zfw_kg == 5000
    assert res.tank_allowed_kg == 4000
    assert res.tank_exceeds


def test_tank_allowed_is_lower_ceiling():
    lim = core.evaluate_limits(tow=80000, lwg=72000, tanker_fuel=10000, zfw=70000,
                               trip_plus_taxi=8000, mtow_limit=93500, mlw_limit=77800)
    assert lim.max_tank_by_mtow_kg == 23500
    assert lim.max_tank_by_mlw_kg == 15800
    assert lim.tank_allowed_kg == 15800
    assert lim.limiter == "MLW"


def test_limiter_mtow_when_takeoff_binds():
    lim = core.evaluate_limits(tow=0, lwg=0, tanker_fuel=0, zfw=60000,
                               trip_plus_taxi=20000, mtow_limit=77000, mlw_limit=66000)
    assert lim.tank_allowed_kg == 17000
    assert lim.limiter == "MTOW"


def test_limiter_tie_reports_mtow():
    lim = core.evaluate_limits(tow=0, lwg=0, tanker_fuel=0, zfw=0,
                               trip_plus_taxi=11000, mtow_limit=77000, mlw_limit=66000)
    assert lim.max_tank_by_mtow_kg == lim.max_tank_by_mlw_kg
    assert lim.limiter == "MTOW"


def test_limits_in_tons_are_normalized():
    lim = core.evaluate_limits(tow=78000, lwg=60000, tanker_fuel=0, zfw=0,
                               trip_plus_taxi=0, mtow_limit=77, mlw_limit=66)
    assert lim.mtow_limit_kg == 77000
    assert lim.mlw_limit_kg == 66000
    assert lim.tow_exceeds
    assert not lim.lwg_exceeds


def test_exceedance_is_strict():
    lim = core.evaluate_limits(tow=77000, lwg=66000, tanker_fuel=11000, zfw=66000,
                               trip_plus_taxi=0, mtow_limit=77000, mlw_limit=66000)
    assert not lim.tow_exceeds
    assert not lim.lwg_exceeds
    assert lim.tank_allowed_kg == 0
    assert lim.tank_exceeds


# ---- panel facade ----

def test_reset_gives_empty_fields_and_zero_weights():
    blank = core.reset_inputs()
    assert all(getattr(blank, f) == "" for f in core.INPUT_FIELDS)
    for variant in ("CEO", "NEO"):
        for model in ("A320", "A321"):
            lim = get_limits(variant, model)
            res = core.compute_panel(blank, lim)
            assert (res.tanker_fuel_kg, res.tow_kg, res.lwg_kg) == (0, 0, 0)
            assert res.tank_allowed_kg == min(lim.mtow, lim.mlw)


def test_compute_is_idempotent():
    inp = core.CalculatorInput(taxi="0.25", sector2="1234.5", sector1="4321,5",
                               zfw="61000.7", trip_plus_taxi="4500")
    assert core.compute_panel(inp, CEO_A320) == core.compute_panel(inp, CEO_A320)


def test_compute_does_not_mutate_input():
    inp = core.CalculatorInput(taxi="0.2", zfw="60000")
    core.compute_panel(inp, CEO_A320)
    assert inp == core.CalculatorInput(taxi="0.2", zfw="60000")


def test_from_mapping_accepts_camel_case_and_ignores_extras():
    inp = core.CalculatorInput.from_mapping({"taxi": 0.2, "tripPlusTaxi": "9200", "sec1": "9000",
                                             "notes": "x", "zfw": None})
    assert inp.taxi == "0.2"
    assert inp.trip_plus_taxi == "9200"
    assert inp.sector1 == "9000"
    assert inp.zfw == ""


def test_perf_compute_tanker_dict_contract():
    out = core.perf_compute_tanker({"taxi": "0.2", "sector1": "9000", "zfw": "60000",
                                    "tripPlusTaxi": "9200"}, variant="neo", model="a320")
    assert out["variant"] == "NEO" and out["model"] == "A320"
    assert out["mtow_limit_kg"] == 79000
    assert out["mlw_limit_kg"] == 67400
    assert out["tank_allowed_kg"] == min(79000 - 60000, 67400 + 9200 - 60000)
    for k in ("tanker_fuel_kg", "tow_kg", "lwg_kg", "mlw_delta_kg", "tank_allowed_kg",
              "delta_reduce_zfw_kg", "tow_exceeds", "lwg_exceeds", "tank_exceeds"):
        assert k in out


def test_perf_compute_tanker_unknown_model():
    with pytest.raises(KeyError):
        core.perf_compute_tanker({}, variant="CEO", model="A330")


# ---- display helpers ----

def test_format_helpers():
    assert core.format_kg(69200) == "69200"
    assert core.format_kg(1234567.4) == "1234567"
    assert core.format_signed_kg(150) == "+150"
    assert core.format_signed_kg(-6000) == "-6000"
    assert core.format_signed_kg(0) == "0"
    assert core.zfw_status_label(1) == "(Overweight)"
    assert core.zfw_status_label(0) == "(Under Limit)"
    assert core.zfw_status_label(-6000) == "(Under Limit)"


def test_one_variant_feeds_both_panels():
    both = limits_for_variant("NEO")
    a320 = core.compute_panel(core.reset_inputs(), both["A320"])
    a321 = core.compute_panel(core.reset_inputs(), both["A321"])
    assert (a320.mtow_limit_kg, a320.mlw_limit_kg) == (79000, 67400)
    assert (a321.mtow_limit_kg, a321.mlw_limit_kg) == (97000, 79200)
    assert a321.tank_allowed_kg == 79200
