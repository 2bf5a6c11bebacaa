"""Tests for signature parsing and the packaged UDF tables."""

import json
import os

import pytest

from udfdocs.registry import RegistryError, load_module, load_modules
from udfdocs.signatures import (
    DATA_DIR,
    MODULE_ORDER,
    Parameter,
    Signature,
    SignatureError,
    check_signature,
    parse_signature,
    parse_signature_table,
)


class TestParseSignature:
    def test_full_record(self):
        sig = parse_signature(
            "_ColorGetRed",
            {
                "documentation": "Returns the red component of a given color",
                "label": "_ColorGetRed ( $iColor )",
                "params": [{"label": "$iColor", "documentation": "The RGB color"}],
            },
            "udf_color",
        )
        assert sig == Signature(
            name="_ColorGetRed",
            label="_ColorGetRed ( $iColor )",
            documentation="Returns the red component of a given color",
            params=(Parameter("$iColor", "The RGB color"),),
        )

    def test_missing_documentation_and_params(self):
        sig = parse_signature("_Now", {"label": "_Now (  )"})
        assert sig.documentation == ""
        assert sig.params == ()

    def test_param_without_documentation(self):
        sig = parse_signature("_F", {"label": "_F ( $a )", "params": [{"label": "$a"}]})
        assert sig.params == (Parameter("$a", ""),)

    def test_missing_label(self):
        with pytest.raises(SignatureError) as exc:
            parse_signature("_Broken", {"documentation": "no label"}, "udf_test")
        assert "invalid signature for name=_Broken in module=udf_test" in str(exc.value)
        assert exc.value.name == "_Broken"
        assert exc.value.module == "udf_test"

    def test_blank_label(self):
        with pytest.raises(SignatureError):
            parse_signature("_Blank", {"label": "   "})

    def test_record_not_a_mapping(self):
        with pytest.raises(SignatureError, match="record is not a mapping"):
            parse_signature("_List", ["_List ( )"])

    def test_params_not_a_list(self):
        with pytest.raises(SignatureError, match="params is not a list"):
            parse_signature("_F", {"label": "_F ( $a )", "params": "$a"})

    def test_param_without_label(self):
        with pytest.raises(SignatureError, match="parameter 1 has no label"):
            parse_signature(
                "_F",
                {"label": "_F ( $a, $b )", "params": [{"label": "$a"}, {"documentation": "b"}]},
            )

    def test_signature_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_signature("_F", {})


class TestParseSignatureTable:
    def test_keeps_authored_case_and_order(self):
        table = parse_signature_table(
            {"_B": {"label": "_B ( )"}, "_a": {"label": "_a ( )"}}, "m"
        )
        assert list(table) == ["_B", "_a"]

    def test_one_bad_record_fails_the_table(self):
        with pytest.raises(SignatureError, match="name=_Bad in module=m"):
            parse_signature_table(
                {"_Good": {"label": "_Good ( )"}, "_Bad": {"params": []}}, "m"
            )


class TestCheckSignature:
    def test_built_signature_passes_through(self):
        sig = Signature(name="_Now", label="_Now (  )")
        assert check_signature("_Now", sig, "udf_date") is sig

    def test_blank_label(self):
        with pytest.raises(SignatureError, match="name=_X in module=udf_x: missing label"):
            check_signature("_X", Signature(name="_X", label=""), "udf_x")

    def test_param_without_label(self):
        sig = Signature(name="_X", label="_X ( $a )", params=(Parameter(""),))
        with pytest.raises(SignatureError, match="parameter 0 has no label"):
            check_signature("_X", sig, "udf_x")

    def test_raw_record_is_parsed(self):
        sig = check_signature("_X", {"label": "_X ( )"}, "udf_x")
        assert sig == Signature(name="_X", label="_X ( )")

    def test_raw_record_without_label(self):
        with pytest.raises(SignatureError, match="name=_X in module=udf_x"):
            check_signature("_X", {"documentation": "no label"}, "udf_x")


class TestPackagedData:
    def test_every_module_has_a_data_file(self):
        for name in MODULE_ORDER:
            assert os.path.exists(os.path.join(DATA_DIR, f"{name}.json")), name

    def test_module_order_has_no_duplicates(self):
        assert len(MODULE_ORDER) == len(set(MODULE_ORDER))

    def test_all_modules_load(self):
        modules = load_modules()
        assert [m.name for m in modules] == list(MODULE_ORDER)
        for m in modules:
            assert m.signatures, m.name
            assert m.include.startswith("(Requires: `#include <"), m.name

    def test_color_module(self):
        color = load_module("udf_color")
        red = color.signatures["_ColorGetRed"]
        assert red.documentation == "Returns the red component of a given color"
        assert red.label == "_ColorGetRed ( $iColor )"
        assert [p.label for p in red.params] == ["$iColor"]
        assert color.include == "(Requires: `#include <Color.au3>`)"

    def test_now_has_no_params(self):
        now = load_module("udf_date").signatures["_Now"]
        assert now.label == "_Now (  )"
        assert now.params == ()

    def test_unknown_module(self):
        with pytest.raises(RegistryError, match="unknown module"):
            load_module("udf_does_not_exist")

    def test_malformed_data_file(self, tmp_path):
        (tmp_path / "udf_bad.json").write_text(json.dumps({"include": "x"}))
        with pytest.raises(RegistryError, match="'signatures' table"):
            load_module("udf_bad", str(tmp_path))

    def test_invalid_json(self, tmp_path):
        (tmp_path / "udf_bad.json").write_text("{\"signatures\": ")
        with pytest.raises(RegistryError, match="module 'udf_bad': unreadable data file"):
            load_module("udf_bad", str(tmp_path))

    def test_not_utf8(self, tmp_path):
        (tmp_path / "udf_bad.json").write_bytes(b"\xff\xfe\x00{")
        with pytest.raises(RegistryError, match="module 'udf_bad': unreadable data file"):
            load_module("udf_bad", str(tmp_path))

    def test_bad_record_in_data_file(self, tmp_path):
        (tmp_path / "udf_bad.json").write_text(
            json.dumps({"signatures": {"_NoLabel": {"documentation": "?"}}})
        )
        with pytest.raises(SignatureError, match="name=_NoLabel in module=udf_bad"):
            load_module("udf_bad", str(tmp_path))
