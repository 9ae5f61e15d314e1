"""Tests for the many-stylesheet postcss_multi_run rule."""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from stylerun.rules.batch import group_sources, postcss_multi_run
from stylerun.rules.errors import DuplicateOutput, NoPluginsProvided, OrphanSidecar
from stylerun.rules.types import SourcePair

P = PurePosixPath


def test_group_sources_pairs_maps_with_stylesheets() -> None:
    assert group_sources(["a.css", "b.css", "b.css.map"]) == [
        SourcePair(content=P("a.css")),
        SourcePair(content=P("b.css"), sidecar=P("b.css.map")),
    ]


def test_group_sources_keeps_first_seen_order() -> None:
    pairs = group_sources(["z.css.map", "a.css", "z.css"])
    assert [pair.content for pair in pairs] == [P("z.css"), P("a.css")]
    assert pairs[0].sidecar == P("z.css.map")


def test_orphan_map_is_rejected() -> None:
    with pytest.raises(OrphanSidecar, match="orphan.css.map was passed without a corresponding CSS file"):
        group_sources(["orphan.css.map"])


def test_batch_outputs_follow_pattern(make_ctx, host, autoprefixer) -> None:
    outputs = postcss_multi_run(
        make_ctx("build"),
        srcs=["a.css", "b.css", "b.css.map"],
        plugins={autoprefixer: ""},
        runner="tools/runner",
        sourcemap=True,
    )

    assert outputs == [
        P("build/a.css"),
        P("build/a.css.map"),
        P("build/b.css"),
        P("build/b.css.map"),
    ]
    first, second = host.actions
    assert "--cssMapFile" not in first.arguments
    assert second.inputs == (P("b.css"), P("b.css.map"))
    assert "b.css.map" in second.arguments


def test_batch_without_sourcemap_declares_css_only(make_ctx, host, autoprefixer) -> None:
    outputs = postcss_multi_run(
        make_ctx("build"),
        srcs=["styles/a.css", "styles/b.css"],
        plugins={autoprefixer: ""},
        runner="tools/runner",
        output_pattern="{dir}/{rule}.{name}",
    )
    assert outputs == [P("styles/build.a.css"), P("styles/build.b.css")]
    assert len(host.actions) == 2


def test_orphan_in_batch_declares_nothing(make_ctx, host, autoprefixer) -> None:
    with pytest.raises(OrphanSidecar):
        postcss_multi_run(
            make_ctx("build"),
            srcs=["a.css", "orphan.css.map"],
            plugins={autoprefixer: ""},
            runner="tools/runner",
        )
    assert host.actions == []


def test_batch_without_plugins_declares_nothing(make_ctx, host) -> None:
    with pytest.raises(NoPluginsProvided):
        postcss_multi_run(make_ctx("build"), srcs=["a.css"], plugins={}, runner="tools/runner")
    assert host.actions == []


def test_empty_batch_is_a_no_op(make_ctx, host) -> None:
    assert postcss_multi_run(make_ctx("build"), srcs=[], plugins={}, runner="tools/runner") == []
    assert host.actions == []


def test_colliding_output_names_are_rejected(make_ctx, host, autoprefixer) -> None:
    with pytest.raises(DuplicateOutput, match="build/a.css is declared for both x/a.css and y/a.css") as excinfo:
        postcss_multi_run(
            make_ctx("build"),
            srcs=["x/a.css", "y/a.css"],
            plugins={autoprefixer: ""},
            runner="tools/runner",
        )
    assert excinfo.value.reason_code == "DUPLICATE_OUTPUT"
    assert host.actions == []


def test_dir_placeholder_keeps_same_named_files_apart(make_ctx, host, autoprefixer) -> None:
    outputs = postcss_multi_run(
        make_ctx("build"),
        srcs=["x/a.css", "y/a.css"],
        plugins={autoprefixer: ""},
        runner="tools/runner",
        output_pattern="{rule}/{dir}/{name}",
    )
    assert outputs == [P("build/x/a.css"), P("build/y/a.css")]
