"""Tests for declaration post-processing patches."""

from __future__ import annotations

from dtsgen.postproc import (
    EventHandlerSignatureFix,
    FunctionUnionParenthesizer,
    PatchChain,
    RegexPatch,
    TupleReturnRestorer,
    apply_post_processing,
)

TRUNCATED = "interface izi_unit {\n  is_cc(this: izi_unit): (boolean, CCFlagMask,;\n}\n"


def test_tuple_return_restorer_rebuilds_family_shape() -> None:
    restorer = TupleReturnRestorer({("is_cc", "isCC"): ("boolean", "number")})
    fixed = restorer.apply(TRUNCATED)
    assert "  is_cc(this: izi_unit): LuaMultiReturn<[boolean, number]>;\n" in fixed
    assert restorer.apply(fixed) == fixed


def test_tuple_return_restorer_ignores_other_methods() -> None:
    restorer = TupleReturnRestorer({("is_rooted",): ("boolean", "number")})
    assert restorer.apply(TRUNCATED) == TRUNCATED


def test_function_union_parenthesizer_wraps_function_alternative() -> None:
    text = (
        "  vec2: vec2 | (this: void, x: number) => vec2;\n"
        "  other: string | (this: void) => string;\n"
    )
    patch = FunctionUnionParenthesizer(("vec2",))
    fixed = patch.apply(text)
    assert "  vec2: vec2 | ((this: void, x: number) => vec2);\n" in fixed
    assert "  other: string | (this: void) => string;\n" in fixed
    assert patch.apply(fixed) == fixed


def test_function_union_parenthesizer_handles_alias_lines() -> None:
    text = "type cone = cone_data | (this: void, angle: number) => cone;\n"
    fixed = FunctionUnionParenthesizer(("cone",)).apply(text)
    assert fixed == "type cone = cone_data | ((this: void, angle: number) => cone);\n"


def test_event_handler_fix_normalises_subscription() -> None:
    text = (
        "  on_buff_gain(this: void, cb: (this: void, ev: buff_event) => void): "
        "(this: void) => void;\n"
    )
    patch = EventHandlerSignatureFix(("on_buff_gain",))
    fixed = patch.apply(text)
    assert fixed == "  on_buff_gain(this: void, cb: (this: void, ev: any) => void): () => void;\n"
    assert patch.apply(fixed) == fixed


def test_patch_chain_applies_in_order() -> None:
    chain = PatchChain((RegexPatch("alpha", "beta"), RegexPatch("beta", "gamma")))
    assert chain.apply("alpha") == "gamma"


def test_izi_sdk_chain_restores_tuple_returns() -> None:
    fixed = apply_post_processing("common/izi_sdk", TRUNCATED)
    assert "is_cc(this: izi_unit): LuaMultiReturn<[boolean, number, number, boolean, boolean]>;" in fixed


def test_patches_are_scoped_to_their_module() -> None:
    assert apply_post_processing("core", TRUNCATED) == TRUNCATED
    kick = "  add(this: void, name: string, string|nil: any, id: number): void;\n"
    assert apply_post_processing("common/utility/kick_external_filters_helper", kick) == (
        "  add(this: void, name: string, id: number): void;\n"
    )
    assert apply_post_processing("common/ow_menu_api", kick) == kick


def test_spell_sequence_helper_literal_types() -> None:
    text = '  mode: string "burst";\n  target: game_object | (this: void) => game_object;\n'
    fixed = apply_post_processing("common/utility/spell_sequence_helper", text)
    assert '  mode: "burst";\n' in fixed
    assert "  target: game_object | ((this: void) => game_object);\n" in fixed
