"""Unit tests for output naming helpers."""

from __future__ import annotations

from pathlib import PurePosixPath

from stylerun.rules.naming import default_output_name, expand_output_pattern, sourcemap_name, strip_extension


def test_default_output_name() -> None:
    assert default_output_name("style") == "style.css"
    assert default_output_name("style", "site.min.css") == "site.min.css"


def test_sourcemap_name() -> None:
    assert sourcemap_name("build/a.css") == "build/a.css.map"


def test_strip_extension_only_drops_last_segment() -> None:
    assert strip_extension("b.css.map") == "b.css"
    assert strip_extension(PurePosixPath("v1.2/b.css.map")) == "v1.2/b.css"
    assert strip_extension("noext") == ""


def test_expand_default_pattern() -> None:
    assert expand_output_pattern("{rule}/{name}", "styles/a.css", "build") == "build/a.css"


def test_expand_dir_placeholder() -> None:
    assert expand_output_pattern("{dir}/{rule}-{name}", "styles/theme/a.css", "min") == "styles/theme/min-a.css"
    assert expand_output_pattern("{dir}/{name}", "a.css", "min") == "/a.css"


def test_unknown_placeholders_pass_through() -> None:
    assert expand_output_pattern("{rule}/{stem}.out", "a.css", "build") == "build/{stem}.out"
    assert expand_output_pattern("{rule/{name}", "a.css", "build") == "{rule/a.css"
