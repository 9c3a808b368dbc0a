"""Tests for the flattening algorithms."""

from xml.etree import ElementTree as ET

import pytest

from multiconf.utils.flatten import (
    flatten_json,
    flatten_tree,
    flatten_xml,
    flatten_yaml,
    join_key,
)


class TestFlattenTree:
    """Test cases for JSON/YAML style flattening."""

    def test_join_key(self):
        """Test prefix joining."""
        assert join_key("", "a") == "a"
        assert join_key("a", "b") == "a.b"
        assert join_key("a", 1) == "a.1"

    def test_nested_objects_and_arrays(self):
        """Test the canonical nested document."""
        result = flatten_json({"A": {"B": 1, "C": [True, "x"]}})
        assert result == {"A.B": 1, "A.C[0]": True, "A.C[1]": "x"}

    def test_objects_inside_arrays(self):
        """Test array elements that are objects."""
        result = flatten_json({"Servers": [{"Host": "a", "Port": 1}, {"Host": "b"}]})
        assert result == {
            "Servers[0].Host": "a",
            "Servers[0].Port": 1,
            "Servers[1].Host": "b",
        }

    def test_nested_arrays(self):
        """Test arrays of arrays are indexed twice."""
        result = flatten_json({"Matrix": [[1, 2], [3]]})
        assert result == {"Matrix[0][0]": 1, "Matrix[0][1]": 2, "Matrix[1][0]": 3}

    def test_only_leaves_are_stored(self):
        """Test empty containers produce no entries."""
        result = flatten_json({"Empty": {}, "None": [], "Leaf": None})
        assert result == {"Leaf": None}

    def test_null_root(self):
        """Test a null document yields an empty map."""
        assert flatten_json(None) == {}
        assert flatten_yaml(None) == {}

    def test_sequence_root(self):
        """Test a sequence root is indexed from an empty prefix."""
        assert flatten_yaml(["a", {"b": 1}]) == {"[0]": "a", "[1].b": 1}

    def test_json_root_must_be_an_object(self):
        """Test a JSON array root is rejected."""
        with pytest.raises(TypeError):
            flatten_json(["a", "b"])
        assert flatten_json({}) == {}

    def test_scalar_root_rejected(self):
        """Test scalar roots are rejected."""
        with pytest.raises(TypeError):
            flatten_json(42)
        with pytest.raises(TypeError):
            flatten_yaml("just a string")

    def test_yaml_keys_are_stringified(self):
        """Test non-string YAML keys are joined with str()."""
        assert flatten_yaml({1: {True: "x"}}) == {"1.True": "x"}

    def test_existing_result_is_extended(self):
        """Test flatten_tree adds to a supplied map."""
        result = {"existing": 1}
        flatten_tree({"a": 2}, result=result)
        assert result == {"existing": 1, "a": 2}


class TestFlattenXml:
    """Test cases for XML flattening."""

    def test_nested_elements(self):
        """Test nested elements build dotted keys without the root name."""
        root = ET.fromstring(
            "<config><database><connection><server>localhost</server>"
            "</connection></database></config>"
        )
        assert flatten_xml(root) == {"database.connection.server": "localhost"}

    def test_setting_attributes(self):
        """Test name/value attribute pairs become keys."""
        root = ET.fromstring(
            "<configuration><appSettings>"
            '<setting name="Environment" value="Dev" />'
            '<setting name="MaxRetries" value="5" />'
            "</appSettings></configuration>"
        )
        result = flatten_xml(root)
        assert result == {
            "appSettings.Environment": "Dev",
            "appSettings.MaxRetries": "5",
        }
        assert not any(key.startswith("appSettings.setting") for key in result)

    def test_setting_at_top_level(self):
        """Test a setting directly below the root has no prefix."""
        root = ET.fromstring('<appSettings><setting name="Env" value="Dev"/></appSettings>')
        assert flatten_xml(root) == {"Env": "Dev"}

    def test_setting_children_are_ignored(self):
        """Test a setting element is not descended into."""
        root = ET.fromstring(
            '<root><setting name="K" value="V"><inner>x</inner></setting></root>'
        )
        assert flatten_xml(root) == {"K": "V"}

    def test_setting_with_extra_attributes(self):
        """Test extra attributes do not prevent the setting rule."""
        root = ET.fromstring('<root><item name="K" value="V" type="int" /></root>')
        assert flatten_xml(root) == {"K": "V"}

    def test_single_name_attribute_is_regular_element(self):
        """Test an element needs both name and value to be a setting."""
        root = ET.fromstring('<root><item name="K" other="x">text</item></root>')
        assert flatten_xml(root) == {"item": "text"}

    def test_text_is_trimmed(self):
        """Test leaf text is trimmed."""
        root = ET.fromstring("<root><name>\n    padded   \n</name></root>")
        assert flatten_xml(root) == {"name": "padded"}

    def test_empty_element(self):
        """Test an empty element yields an empty string."""
        root = ET.fromstring("<root><empty /><blank>   </blank></root>")
        assert flatten_xml(root) == {"empty": "", "blank": ""}

    def test_values_are_strings(self):
        """Test no type inference is applied to XML values."""
        root = ET.fromstring("<root><port>8080</port><debug>true</debug></root>")
        assert flatten_xml(root) == {"port": "8080", "debug": "true"}

    def test_repeated_elements_last_wins(self):
        """Test repeated element names collapse onto one key."""
        root = ET.fromstring("<root><s>a</s><s>b</s></root>")
        assert flatten_xml(root) == {"s": "b"}

    def test_namespaced_tags_use_local_name(self):
        """Test namespace URIs are dropped from keys."""
        root = ET.fromstring('<c:root xmlns:c="urn:cfg"><c:host>h</c:host></c:root>')
        assert flatten_xml(root) == {"host": "h"}

    def test_comments_are_skipped(self):
        """Test comment nodes never become entries."""
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        root = ET.fromstring("<root><!-- note --><a>1</a></root>", parser=parser)
        assert flatten_xml(root) == {"a": "1"}

    def test_no_root(self):
        """Test a missing root yields an empty map."""
        assert flatten_xml(None) == {}

    def test_comment_only_element_is_a_container(self):
        """Test an element holding only a comment emits nothing."""
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        root = ET.fromstring("<config><a><!-- c --></a><b>1</b></config>", parser=parser)
        assert flatten_xml(root) == {"b": "1"}

    def test_text_with_comment_is_a_container(self):
        """Test text next to a comment is not a single text value."""
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        root = ET.fromstring("<config><a>x<!-- c --></a></config>", parser=parser)
        assert flatten_xml(root) == {}
