# ===-----------------------------------------------------------------------===#
# Distributed under the 3-Clause BSD License. See accompanying file LICENSE or
# copy at https://opensource.org/licenses/BSD-3-Clause.
# SPDX-License-Identifier: BSD-3-Clause
# ===-----------------------------------------------------------------------===#

import textwrap

import pytest

from wgsl_reflect.bindings import scan_bindings
from wgsl_reflect.constants import MAX_BINDINGS, MAX_GROUPS, USAGE_CAPACITY
from wgsl_reflect.errors import (
    E_BINDING_OUT_OF_RANGE,
    BindingScanError,
    MalformedBindingDeclaration,
)
from wgsl_reflect.grammar import BINDING_SHAPES, OVERSIZED_INDEX
from wgsl_reflect.model import DeclarationSyntax, ResourceKind, ShaderMetadata


def _scan(src: str):
    meta = ShaderMetadata()
    meta.reset_groups()
    result = scan_bindings(textwrap.dedent(src), meta)
    return meta, result


def test_shape_order_is_fixed():
    assert [str(s) for s in BINDING_SHAPES] == [
        "attribute/var",
        "attribute/texture",
        "legacy/var",
        "legacy/texture",
    ]


def test_attribute_var_bindings():
    meta, result = _scan(
        """\
        @group(0) @binding(0) var<uniform> a: Params;
        @group(0) @binding(1) var<storage, read_write> b: array<f32>;
        """
    )
    assert result.matched == 2
    assert result.recorded == 2
    g0 = meta.groups[0]
    assert g0.num_bindings == 2
    assert [b.binding for b in g0.iter_bindings()] == [0, 1]
    assert [b.usage for b in g0.iter_bindings()] == [
        "uniform",
        "storage, read_write",
    ]
    assert all(b.group == 0 for b in g0.iter_bindings())
    assert all(b.kind is ResourceKind.VAR for b in g0.iter_bindings())


def test_no_declarations_is_not_an_error():
    meta, result = _scan("@compute @workgroup_size(1) fn main() {}")
    assert result.matched == 0
    assert result.skipped == []
    assert list(meta.active_groups()) == []


def test_legacy_bracket_syntax():
    meta, result = _scan(
        """\
        [[group(1), binding(0)]] var<storage, read> input: Buf;
        [[group(1), binding(1)]] var<storage, read_write> output: Buf;
        """
    )
    assert result.matched == 2
    b0 = meta.groups[1].bindings[0]
    assert b0.usage == "storage, read"
    assert b0.syntax is DeclarationSyntax.LEGACY
    assert meta.groups[1].bindings[1].usage == "storage, read_write"


def test_texture_kind_in_both_syntaxes():
    meta, _ = _scan(
        """\
        @group(0) @binding(0) texture<f32> tex_a;
        [[group(0), binding(1)]] texture<u32> tex_b;
        """
    )
    a = meta.groups[0].bindings[0]
    b = meta.groups[0].bindings[1]
    assert (a.kind, a.syntax, a.usage) == (
        ResourceKind.TEXTURE,
        DeclarationSyntax.ATTRIBUTE,
        "f32",
    )
    assert (b.kind, b.syntax, b.usage) == (
        ResourceKind.TEXTURE,
        DeclarationSyntax.LEGACY,
        "u32",
    )


def test_multiple_groups():
    meta, result = _scan(
        """\
        @group(0) @binding(0) var<uniform> u: U;
        @group(2) @binding(0) var<storage, read> s: S;
        @group(2)
        @binding(1)
        var<storage, read_write> t: T;
        """
    )
    assert result.matched == 3
    assert [g.group for g in meta.active_groups()] == [0, 2]
    assert meta.groups[2].num_bindings == 2
    assert meta.groups[1].num_bindings == 0


def test_gap_is_written_as_found():
    meta, _ = _scan(
        """\
        @group(0) @binding(0) var<uniform> a: A;
        @group(0) @binding(2) var<uniform> c: C;
        """
    )
    g0 = meta.groups[0]
    assert g0.num_bindings == 2
    assert g0.bindings[1] is None
    assert g0.bindings[2].binding == 2


def test_duplicate_binding_overwrites_and_counts_twice():
    meta, result = _scan(
        """\
        @group(0) @binding(0) var<uniform> a: A;
        @group(0) @binding(0) var<storage, read> b: B;
        """
    )
    assert result.matched == 2
    g0 = meta.groups[0]
    assert g0.num_bindings == 2
    assert g0.bindings[0].usage == "storage, read"


def test_out_of_range_binding_is_skipped_without_touching_other_slots():
    meta, result = _scan(
        """\
        @group(0) @binding(0) var<uniform> a: A;
        @group(0) @binding(99) var<storage, read> big: B;
        @group(0) @binding(1) var<storage, read> c: C;
        """
    )
    assert result.matched == 3
    assert result.recorded == 2
    assert len(result.skipped) == 1
    bad = result.skipped[0]
    assert isinstance(bad, MalformedBindingDeclaration)
    assert bad.code == E_BINDING_OUT_OF_RANGE
    assert (bad.group, bad.binding) == (0, 99)
    assert "@binding(99)" in bad.text
    assert meta.skipped == result.skipped

    g0 = meta.groups[0]
    assert g0.num_bindings == 2
    assert len(g0.bindings) == MAX_BINDINGS
    assert [b.binding for b in g0.iter_bindings()] == [0, 1]


def test_out_of_range_group_is_skipped():
    meta, result = _scan(
        f"@group({MAX_GROUPS}) @binding(0) var<uniform> a: A;\n"
    )
    assert len(result.skipped) == 1
    assert result.skipped[0].group == MAX_GROUPS
    assert len(meta.groups) == MAX_GROUPS
    assert list(meta.active_groups()) == []


def test_skipped_declarations_are_logged(caplog):
    with caplog.at_level("WARNING", logger="wgsl_reflect"):
        _scan("@group(0) @binding(8) var<uniform> a: A;\n")
    assert "out of range" in caplog.text


def test_overlong_usage_is_truncated():
    usage = "read_write, " * 40
    meta, _ = _scan(f"@group(0) @binding(0) var<{usage}> a: A;\n")
    stored = meta.groups[0].bindings[0].usage
    assert len(stored.encode("utf-8")) <= USAGE_CAPACITY


@pytest.mark.parametrize(
    "source,metadata",
    [(None, ShaderMetadata()), ("@group(0) @binding(0) var<uniform> a: A;", None)],
)
def test_absent_input_raises(source, metadata):
    with pytest.raises(BindingScanError):
        scan_bindings(source, metadata)


def test_huge_binding_number_is_skipped_not_crashing():
    digits = "9" * 5000
    meta, result = _scan(
        f"""\
        @group(0) @binding(0) var<uniform> a: A;
        @group(0) @binding({digits}) var<uniform> huge: H;
        """
    )
    assert result.matched == 2
    assert len(result.skipped) == 1
    bad = result.skipped[0]
    assert bad.binding == OVERSIZED_INDEX
    assert digits in bad.text
    assert meta.groups[0].num_bindings == 1


def test_huge_group_number_is_skipped():
    meta, result = _scan(
        "[[group(" + "1" * 4400 + "), binding(0)]] var<uniform> a: A;\n"
    )
    assert [s.group for s in result.skipped] == [OVERSIZED_INDEX]
    assert list(meta.active_groups()) == []


def test_non_ascii_digits_are_not_indices():
    # Arabic-Indic zero and eight
    meta, result = _scan(
        "@group(٠) @binding(٨) var<uniform> a: A;\n"
    )
    assert result.matched == 0
    assert list(meta.active_groups()) == []
