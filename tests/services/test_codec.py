"""Tests for CodecService — ServiceResult wrapping of codec operations."""

from pathlib import Path

import pytest

from datastruct.config.settings import DataStructSettings
from datastruct.domain.values import Binary, Dict, List, Number, String
from datastruct.services.codec import CodecService, outline


class TestOutline:
    def test_scalar(self) -> None:
        assert outline(String("hi")) == {"type": "String", "size": 2, "value": '"hi"'}

    def test_binary_uses_base64(self) -> None:
        assert outline(Binary(b"Hello World"))["value"] == "SGVsbG8gV29ybGQ="

    def test_compound_children_and_keys(self) -> None:
        node = outline(Dict({"a": List([Number(1)])}))
        assert node["type"] == "Dict"
        assert node["size"] == 9
        child = node["children"][0]
        assert child["key"] == "a"
        assert child["type"] == "List"
        assert child["children"] == [{"type": "Number", "size": 8, "value": "1"}]


class TestInspect:
    def test_reports_value(self, codec: CodecService) -> None:
        result = codec.inspect("l:n:1:n:2.5:s:x::")
        assert result.ok
        assert result.op == "inspect"
        assert result.data["datatype"] == "List"
        assert result.data["size"] == 17
        assert result.data["weight"] == 3.5
        assert result.data["tagged"] == "l:n:1:n:2.5:s:x::"
        assert result.data["json"] == '[1,2.5,"x"]'
        assert result.data["display"] == '[1,2.5,"x"]'
        assert len(result.data["tree"]["children"]) == 3

    def test_strips_surrounding_whitespace(self, codec: CodecService) -> None:
        result = codec.inspect("  s:a:\n")
        assert result.ok
        assert result.data["datatype"] == "String"

    def test_lone_surrogate_string(self, codec: CodecService) -> None:
        result = codec.inspect("s:\udcff:")
        assert result.ok
        assert result.data["size"] == 3

    def test_unbounded_weight_is_none(self, codec: CodecService) -> None:
        assert codec.inspect("s:a:").data["weight"] is None

    def test_non_finite_number_warns(self, codec: CodecService) -> None:
        result = codec.inspect("n:nan:")
        assert result.ok
        assert "json" not in result.data
        assert any("No JSON projection" in w for w in result.warnings)

    @pytest.mark.parametrize(
        "text,code",
        [
            ("z:foo:", "MALFORMED_TAG"),
            ("sfoo:", "MALFORMED_SEPARATOR"),
            ("n:notanumber:", "VALUE_CONVERSION_ERROR"),
            ("d:s:a:n:1:s:a:n:2::", "DUPLICATE_KEY"),
            ("l:", "UNEXPECTED_END_OF_INPUT"),
            ("s:a:s:b:", "TRAILING_DATA"),
            ("l:" * 5000 + ":" * 5000, "NESTING_TOO_DEEP"),
        ],
        ids=lambda v: v if v.isupper() else None,
    )
    def test_parse_failures(self, codec: CodecService, text: str, code: str) -> None:
        result = codec.inspect(text)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == code
        assert "position" in result.error.detail

    def test_keeps_whitespace_when_configured(self, tmp_path: Path, _isolated_cwd: None) -> None:
        (tmp_path / "datastruct.toml").write_text("[input]\nstrip_whitespace = false\n")
        svc = CodecService(DataStructSettings.from_cli(start=tmp_path))
        result = svc.inspect("s:a:\n")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "TRAILING_DATA"


class TestToJson:
    def test_converts(self, codec: CodecService) -> None:
        result = codec.to_json("d:s:a:n:1:s:b:l:t:true:::")
        assert result.ok
        assert result.data == {"datatype": "Dict", "output": '{"a":1,"b":[true]}'}

    def test_uses_output_settings(self, tmp_path: Path, _isolated_cwd: None) -> None:
        (tmp_path / "datastruct.toml").write_text("[output]\nindent = 2\nensure_ascii = true\n")
        svc = CodecService(DataStructSettings.from_cli(start=tmp_path))
        result = svc.to_json("d:s:k:s:é::")
        assert result.data["output"] == '{\n  "k": "\\u00e9"\n}'

    def test_projection_error(self, codec: CodecService) -> None:
        result = codec.to_json("n:inf:")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "PROJECTION_ERROR"


class TestFromJson:
    def test_converts(self, codec: CodecService) -> None:
        result = codec.from_json('{"a": 1, "b": [true]}')
        assert result.ok
        assert result.data["output"] == "d:s:a:n:1:s:b:l:t:true:::"

    def test_null_fails(self, codec: CodecService) -> None:
        result = codec.from_json("null")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "VALUE_CONVERSION_ERROR"

    def test_too_deep_fails(self, codec: CodecService) -> None:
        result = codec.from_json("[" * 5000 + "]" * 5000)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NESTING_TOO_DEEP"


class TestEncodeFile:
    def test_encodes(self, codec: CodecService, tmp_path: Path) -> None:
        path = tmp_path / "hello.txt"
        path.write_bytes(b"Hello World")
        result = codec.encode_file(path)
        assert result.ok
        assert result.data["output"] == "b:SGVsbG8gV29ybGQ=:"
        assert result.data["size"] == 11
        assert result.data["path"] == str(path)

    def test_missing_file(self, codec: CodecService, tmp_path: Path) -> None:
        result = codec.encode_file(tmp_path / "missing.bin")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "IO_ERROR"
        assert result.error.detail["path"] == str(tmp_path / "missing.bin")


class TestDecodeBinary:
    def test_writes_bytes(self, codec: CodecService, tmp_path: Path) -> None:
        out = tmp_path / "out.bin"
        result = codec.decode_binary("b:SGVsbG8gV29ybGQ=:", out)
        assert result.ok
        assert out.read_bytes() == b"Hello World"
        assert result.data == {"path": str(out), "size": 11}

    def test_rejects_non_binary(self, codec: CodecService, tmp_path: Path) -> None:
        out = tmp_path / "out.bin"
        result = codec.decode_binary("s:hello:", out)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_BINARY"
        assert not out.exists()

    def test_unwritable_target(self, codec: CodecService, tmp_path: Path) -> None:
        out = tmp_path / "missing-dir" / "out.bin"
        result = codec.decode_binary("b:AA==:", out)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "IO_ERROR"

    def test_bad_base64(self, codec: CodecService, tmp_path: Path) -> None:
        result = codec.decode_binary("b:@@:", tmp_path / "x.bin")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "VALUE_CONVERSION_ERROR"
