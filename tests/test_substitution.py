from msgmonster.substitution import Substitutions, Substitutor


class TestSubstitute:
    def test_replaces_every_occurrence(self):
        text = "${className} x = new ${className}();"
        result = Substitutor().substitute(text, {"className": "PointMessage"})
        assert result == "PointMessage x = new PointMessage();"

    def test_unknown_placeholder_is_kept(self):
        result = Substitutor().substitute("${a} ${b} ${a}", {"a": "1"})
        assert result == "1 ${b} 1"

    def test_values_are_inserted_literally(self):
        result = Substitutor().substitute("${a}", {"a": "${b}", "b": "no"})
        assert result == "${b}"

    def test_text_without_placeholders(self):
        text = "if (x) { return; }"
        assert Substitutor().substitute(text, {"x": "y"}) == text


class TestExpandLines:
    def test_separator_and_tail(self):
        template = "return Objects.hash(\n        ${...});\n}"
        result = Substitutor().expand_lines(template, ["x", "y", "z"], ",")
        assert result == "return Objects.hash(\n        x,\n        y,\n        z);\n}"

    def test_single_item_gets_only_tail(self):
        template = "    return\n        ${...};"
        result = Substitutor().expand_lines(template, ["a == other.a"], " &&")
        assert result == "    return\n        a == other.a;"

    def test_and_separator(self):
        result = Substitutor().expand_lines("  ${...}", ["a", "b"], " &&")
        assert result == "  a &&\n  b"

    def test_empty_items_skip_section(self):
        assert Substitutor().expand_lines("a\n${...}\nb", [], ",") is None

    def test_items_keep_placeholders_for_later(self):
        result = Substitutor().expand_lines("${...}", ["name = ${className}.NAME"], ",")
        assert result == "name = ${className}.NAME"


class TestSubstitutions:
    def test_derive_does_not_change_globals(self):
        subs = Substitutions().put("className", "AMessage")
        local = subs.derive(fieldName="x")
        assert local == {"className": "AMessage", "fieldName": "x"}
        assert subs.as_dict() == {"className": "AMessage"}

    def test_local_values_override(self):
        subs = Substitutions().put("fieldName", "global")
        assert subs.derive(fieldName="local")["fieldName"] == "local"
        assert subs.as_dict() == {"fieldName": "global"}
