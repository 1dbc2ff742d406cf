"""Tests for value formatting, attributes and blocks."""

import re

import pytest

from hclgen import (
    serialize, attribute, block, expr, format_value, escape_string,
    HCLSerializer, SerializerOptions, HclList, HclMap, HclNumber, HclString,
    HclBool, Expression,
)


def unescape(text):
    codes = {"n": "\n", "r": "\r", "t": "\t"}
    return re.sub(r'\\(.)', lambda m: codes.get(m.group(1), m.group(1)), text, flags=re.S)


# ---------------------------------------------------------------------------
# escaping
# ---------------------------------------------------------------------------

def test_escape_all_sequences():
    assert escape_string('a\\b"c\nd\re\tf') == 'a\\\\b\\"c\\nd\\re\\tf'

def test_escape_backslash_first():
    assert escape_string('\\n') == '\\\\n'

@pytest.mark.parametrize("text", [
    "", "plain", 'say "hi"', "path\\to\\file", "a\nb\r\nc\td", '\\"\\\n', "${var.x}",
])
def test_escape_round_trip(text):
    assert unescape(escape_string(text)) == text


# ---------------------------------------------------------------------------
# scalars
# ---------------------------------------------------------------------------

def test_serialize_string():
    assert serialize("hello") == '"hello"'

def test_serialize_escaped_strings():
    assert serialize("hello\nworld") == '"hello\\nworld"'
    assert serialize('say "hi"') == '"say \\"hi\\""'
    assert serialize("path\\to\\file") == '"path\\\\to\\\\file"'

def test_serialize_numbers():
    assert serialize(42) == "42"
    assert serialize(-5) == "-5"
    assert serialize(3.14) == "3.14"
    assert serialize(0.5) == "0.5"
    assert serialize(1.0) == "1.0"

def test_serialize_booleans():
    assert serialize(True) == "true"
    assert serialize(False) == "false"

def test_serialize_null():
    assert serialize(None) == "null"

def test_number_rejects_non_finite():
    with pytest.raises(ValueError):
        HclNumber(float("nan"))
    with pytest.raises(ValueError):
        HclNumber(float("inf"))

def test_number_rejects_bool():
    with pytest.raises(TypeError):
        HclNumber(True)

def test_float_exponent_form():
    assert serialize(1e16) == "1e+16"
    assert serialize(0.00001) == "1e-05"
    assert serialize(10 ** 16) == "10000000000000000"

@pytest.mark.parametrize("make", [
    lambda: HclString(5),
    lambda: HclBool(1),
    lambda: Expression(5),
])
def test_scalar_payload_types(make):
    with pytest.raises(TypeError):
        make()


# ---------------------------------------------------------------------------
# expressions
# ---------------------------------------------------------------------------

def test_expression_is_not_quoted():
    assert serialize(expr("var.location")) == "var.location"

def test_expression_is_not_escaped():
    raw = 'join("\\n", [for s in var.list : "${s}"])'
    assert serialize(expr(raw)) == raw

def test_expression_record():
    assert serialize({"kind": "expression", "hcl": "aws_instance.web.id"}) == "aws_instance.web.id"

def test_expression_inside_list():
    assert serialize([expr("var.a"), "b"]) == '[\n  var.a,\n  "b",\n]'


# ---------------------------------------------------------------------------
# lists and maps
# ---------------------------------------------------------------------------

def test_serialize_empty_containers():
    assert serialize([]) == "[]"
    assert serialize({}) == "{}"

def test_serialize_list_has_trailing_commas():
    assert serialize(["a", "b", "c"]) == '[\n  "a",\n  "b",\n  "c",\n]'

def test_list_line_shape():
    items = ["x", 1, None, True, expr("local.y")]
    lines = serialize(items).split("\n")
    assert len(lines) == len(items) + 2
    assert lines[0] == "["
    assert lines[-1] == "]"
    assert all(line.endswith(",") for line in lines[1:-1])

def test_serialize_nested_list():
    assert serialize([[1]]) == "[\n  [\n    1,\n  ],\n]"

def test_serialize_map_aligns_keys():
    assert serialize({"name": "test", "count": 5}) == '{\n  name  = "test"\n  count = 5\n}'

def test_map_alignment_is_per_level():
    result = serialize({"a": {"long_key": 1, "b": 2}, "bb": 1})
    assert result == (
        "{\n"
        "  a  = {\n"
        "    long_key = 1\n"
        "    b        = 2\n"
        "  }\n"
        "  bb = 1\n"
        "}"
    )

def test_map_keeps_insertion_order():
    assert serialize({"z": 1, "a": 2}) == "{\n  z = 1\n  a = 2\n}"

def test_map_keys_unquoted_by_default():
    assert serialize({"my key": 1}) == "{\n  my key = 1\n}"

def test_quote_keys_option():
    options = SerializerOptions(quote_keys=True)
    result = serialize({"my key": 1, "ok": 2}, options)
    assert result == '{\n  "my key" = 1\n  ' + "ok".ljust(8) + " = 2\n}"

def test_format_value_at_level():
    value = HclList([HclNumber(1)])
    assert format_value(value, indent=2, level=1) == "[\n    1,\n  ]"

def test_format_value_rejects_unknown_types():
    with pytest.raises(TypeError):
        HCLSerializer().format_value(object())


# ---------------------------------------------------------------------------
# heredoc
# ---------------------------------------------------------------------------

HEREDOC = SerializerOptions(quote_style="heredoc")

def test_heredoc_multiline_string():
    assert serialize("line1\nline2\n", HEREDOC) == "<<EOF\nline1\nline2\nEOF"

def test_heredoc_without_trailing_newline_stays_quoted():
    assert serialize("a\nb", HEREDOC) == '"a\\nb"'

def test_heredoc_single_line_stays_quoted():
    assert serialize("single", HEREDOC) == '"single"'

def test_heredoc_carriage_return_stays_quoted():
    assert serialize("a\r\nb\r\n", HEREDOC) == '"a\\r\\nb\\r\\n"'

def test_heredoc_marker_avoids_content():
    assert serialize("EOF\n", HEREDOC) == "<<EOF_\nEOF\nEOF_"

def test_heredoc_not_used_for_list_items():
    assert serialize(["a\n"], HEREDOC) == '[\n  "a\\n",\n]'

def test_heredoc_in_map_value():
    assert serialize({"script": "echo hi\n"}, HEREDOC) == "{\n  script = <<EOF\necho hi\nEOF\n}"

def test_heredoc_in_block():
    result = block("resource", ["aws_instance", "web"], {"user_data": "#!/bin/sh\necho hi\n"}, HEREDOC)
    assert result == (
        'resource "aws_instance" "web" {\n'
        "  user_data = <<EOF\n"
        "#!/bin/sh\n"
        "echo hi\n"
        "EOF\n"
        "}"
    )


# ---------------------------------------------------------------------------
# attribute
# ---------------------------------------------------------------------------

def test_attribute_string():
    assert attribute("ami", "ami-12345") == 'ami = "ami-12345"'

def test_attribute_scalars():
    assert attribute("count", 3) == "count = 3"
    assert attribute("enabled", True) == "enabled = true"

def test_attribute_typed_value():
    assert attribute("ami", HclString("ami-12345")) == 'ami = "ami-12345"'

def test_attribute_map_starts_at_level_zero():
    assert attribute("tags", {"Name": "web"}) == 'tags = {\n  Name = "web"\n}'


# ---------------------------------------------------------------------------
# block
# ---------------------------------------------------------------------------

def test_block_with_labels():
    result = block("resource", ["aws_instance", "web"], {
        "ami": "ami-12345678",
        "instance_type": "t2.micro",
    })
    assert result == (
        'resource "aws_instance" "web" {\n'
        '  ami           = "ami-12345678"\n'
        '  instance_type = "t2.micro"\n'
        "}"
    )

def test_block_with_expression():
    result = block("resource", ["azurerm_resource_group", "main"], {
        "name": "my-rg",
        "location": expr("var.location"),
    })
    assert "location = var.location" in result
    assert '"var.location"' not in result

def test_block_without_labels():
    assert block("terraform", [], {"required_version": ">= 1.0"}) == (
        'terraform {\n  required_version = ">= 1.0"\n}'
    )

def test_block_single_label():
    result = block("variable", ["instance_count"], {"type": expr("number"), "default": 1})
    assert result == 'variable "instance_count" {\n  type    = number\n  default = 1\n}'

def test_block_empty_body():
    assert block("terraform", [], {}) == "terraform {\n}"

def test_block_labels_are_escaped():
    assert block("output", ['say "hi"'], {}) == 'output "say \\"hi\\"" {\n}'

def test_block_label_must_be_string():
    with pytest.raises(TypeError):
        block("resource", ["aws_instance", 1], {})

def test_block_body_must_be_mapping():
    with pytest.raises(TypeError):
        block("locals", [], ["a"])

def test_nested_block():
    result = block("resource", ["aws_instance", "web"], {
        "ami": "ami-12345678",
        "tags": {"Name": "HelloWorld", "Environment": "dev"},
    })
    # "tags" counts towards the width of the attribute keys
    assert result == (
        'resource "aws_instance" "web" {\n'
        '  ami  = "ami-12345678"\n'
        "  tags {\n"
        '    Name        = "HelloWorld"\n'
        '    Environment = "dev"\n'
        "  }\n"
        "}"
    )
    assert "tags =" not in result

def test_empty_nested_block():
    assert block("resource", ["a", "b"], {"lifecycle": {}}) == 'resource "a" "b" {\n  lifecycle {}\n}'

def test_deeply_nested_blocks():
    result = block("resource", ["x", "y"], {"a": {"b": {"c": 1}}})
    assert result == (
        'resource "x" "y" {\n'
        "  a {\n"
        "    b {\n"
        "      c = 1\n"
        "    }\n"
        "  }\n"
        "}"
    )

def test_list_of_maps_is_an_attribute():
    result = block("r", [], {"ingress": [{"port": 80}]})
    assert result == (
        "r {\n"
        "  ingress = [\n"
        "    {\n"
        "      port = 80\n"
        "    },\n"
        "  ]\n"
        "}"
    )

def test_typed_map_is_nested_block():
    result = block("r", [], HclMap({"inner": HclMap({"k": HclString("v")})}))
    assert result == 'r {\n  inner {\n    k = "v"\n  }\n}'

def test_block_indent_option():
    result = block("locals", [], {"x": [1], "y": {"z": 2}}, SerializerOptions(indent=4))
    assert result == (
        "locals {\n"
        "    x = [\n"
        "        1,\n"
        "    ]\n"
        "    y {\n"
        "        z = 2\n"
        "    }\n"
        "}"
    )

def test_block_attribute_alignment():
    result = block("resource", ["aws_s3_bucket", "b"], {
        "bucket": "logs",
        "acl": "private",
        "force_destroy": True,
        "versioning": {"enabled": True, "mfa_delete": False},
    })
    lines = result.split("\n")
    top = [line for line in lines if line.startswith("  ") and not line.startswith("    ") and " = " in line]
    inner = [line for line in lines if line.startswith("    ") and " = " in line]
    assert len(top) == 3
    assert len({line.index("=") for line in top}) == 1
    assert len(inner) == 2
    assert len({line.index("=") for line in inner}) == 1
