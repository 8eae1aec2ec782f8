from __future__ import annotations

from licensefile.templates.renderer import render_template


def test_render_replaces_every_occurrence() -> None:
    document = render_template("{{name}} and {{&name}}", {"name": "Ann"})

    assert document == "Ann and Ann"


def test_render_does_not_expand_substituted_values() -> None:
    document = render_template("{{a}}|{{b}}", {"a": "{{b}}", "b": "B"})

    assert document == "{{b}}|B"


def test_render_leaves_unknown_placeholders() -> None:
    document = render_template("{{a}}-{{ missing }}", {"a": "1"})

    assert document == "1-{{ missing }}"


def test_render_keeps_unsupported_fragments_literal() -> None:
    document = render_template("{{#x}}{{a}}", {"a": "1", "x": "no"})

    assert document == "{{#x}}1"


def test_render_is_idempotent() -> None:
    template = "head\n{{a}}\n{{b}}\ntail"
    fields = {"a": "1", "b": "two"}

    assert render_template(template, fields) == render_template(template, fields)

