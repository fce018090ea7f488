import pytest

from sdlt_service.core.exceptions import InvalidInputError, ToolNotFoundError
from sdlt_service.mcp.tools import (
    CALCULATE_SDLT,
    MISSING_PROPERTY_VALUE,
    TOOLS,
    calculate_sdlt,
    dispatch,
    list_descriptors,
)


def test_single_tool_registered():
    descriptors = list_descriptors()
    assert [t.name for t in descriptors] == ["calculate_sdlt"]
    assert TOOLS["calculate_sdlt"].descriptor is CALCULATE_SDLT


def test_descriptor_schema():
    assert CALCULATE_SDLT.description == "Calculate UK SDLT - property tax"
    assert CALCULATE_SDLT.inputSchema == {
        "type": "object",
        "properties": {"property_value": {"type": "number"}},
        "required": ["property_value"],
    }


def test_calculate_sdlt_success():
    content = calculate_sdlt({"property_value": 500000})
    assert len(content) == 1
    assert content[0].type == "text"
    assert content[0].text == "SDLT for £500000.00 is £15000.00"


def test_calculate_sdlt_accepts_float():
    content = calculate_sdlt({"property_value": 300000.4})
    assert content[0].text == "SDLT for £300000.40 is £5000.02"


def test_missing_property_value_is_soft_failure():
    content = calculate_sdlt({})
    assert [c.text for c in content] == [MISSING_PROPERTY_VALUE]
    assert MISSING_PROPERTY_VALUE == "Property value is missing."


@pytest.mark.parametrize(
    "value", [-1, "500000", None, True, [1], {"v": 1}, float("nan"), float("inf")]
)
def test_invalid_property_value(value):
    with pytest.raises(InvalidInputError) as exc_info:
        calculate_sdlt({"property_value": value})
    assert exc_info.value.kind == "InvalidInput"
    assert str(exc_info.value).startswith("InvalidInput: property_value")


def test_extra_arguments_are_ignored():
    content = calculate_sdlt({"property_value": 0, "region": "england"})
    assert content[0].text == "SDLT for £0.00 is £0.00"


def test_dispatch_unknown_tool():
    with pytest.raises(ToolNotFoundError) as exc_info:
        dispatch("calculate_vat", {})
    assert str(exc_info.value) == "ToolNotFound: Unknown tool: calculate_vat"


def test_dispatch_none_arguments_is_missing():
    content = dispatch("calculate_sdlt", None)
    assert content[0].text == MISSING_PROPERTY_VALUE


def test_repeated_calls_identical():
    first = dispatch("calculate_sdlt", {"property_value": 925000})
    second = dispatch("calculate_sdlt", {"property_value": 925000})
    assert first[0].model_dump_json() == second[0].model_dump_json()


def test_invalid_value_is_not_echoed_in_full():
    huge = "9" * 1_000_000
    with pytest.raises(InvalidInputError) as exc_info:
        calculate_sdlt({"property_value": huge})
    message = str(exc_info.value)
    assert len(message) < 200
    assert "(str)" in message


def test_breakdown_computed_once_per_call(monkeypatch):
    from sdlt_service.mcp import tools

    calls = []
    real_breakdown = tools.breakdown

    def counting_breakdown(value):
        calls.append(value)
        return real_breakdown(value)

    monkeypatch.setattr(tools, "breakdown", counting_breakdown)
    content = calculate_sdlt({"property_value": 2000000})
    assert content[0].text == "SDLT for £2000000.00 is £153750.00"
    assert calls == [2000000.0]
