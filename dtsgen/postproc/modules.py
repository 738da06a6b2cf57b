"""Per-module patch chains for known translation losses."""

from __future__ import annotations

from typing import Dict

from .patches import (
    EventHandlerSignatureFix,
    FunctionUnionParenthesizer,
    PatchChain,
    RegexPatch,
    TupleReturnRestorer,
)

# Method families whose annotated tuple returns are truncated by description
# stripping, mapped to the tuple shape they actually return.
IZI_TUPLE_FAMILIES = {
    (
        "is_cc", "isCC", "crowd_controlled", "isCrowdControlled",
        "is_cc_weak", "isWeakCC", "weak_cc",
        "is_rooted", "rooted", "isRooted",
        "is_stunned", "stunned", "isStunned",
        "is_feared", "feared", "isFeared",
        "is_sapped", "sapped", "isSapped",
        "is_silenced", "silenced", "isSilenced",
        "is_cycloned", "cycloned", "isCycloned",
        "is_disarmed", "disarmed", "isDisarmed",
        "is_disoriented", "isDisorient", "isDisoriented",
        "is_incap", "is_incapacitated", "isIncapacitated",
        "immune_cc", "isCCImmune",
    ): ("boolean", "number", "number", "boolean", "boolean"),
    ("get_cc_reduction", "cc_reduction", "getCCReduce", "getCCReduction"): (
        "number", "number", "number",
    ),
    ("is_slowed", "isSlowed", "slowed"): ("boolean", "number", "number"),
    ("get_slow", "slow_mult", "getSlow"): ("number", "number"),
    ("is_slow_immune", "slow_immune", "isSlowImmune"): ("boolean", "number"),
    (
        "get_damage_reduction", "getDRPct", "dmg_reduction", "dmgRed", "getDamageReduction",
    ): ("number", "number", "number"),
    ("isImmune", "isDamageImmune", "immune_dmg"): ("boolean", "number", "number"),
}

IZI_EVENT_HANDLERS = (
    "on_buff_gain",
    "on_buff_lose",
    "on_debuff_gain",
    "on_debuff_lose",
    "on_combat_start",
    "on_combat_finish",
    "on_spell_begin",
    "on_spell_success",
    "on_spell_cancel",
)

IZI_SDK = PatchChain(
    (
        FunctionUnionParenthesizer(
            ("adv_condition", "vec2", "vec3", "circle", "rectangle", "cone")
        ),
        RegexPatch(
            r"skip_back\?: boolean validated in is_castable_to_unit;",
            "skip_back?: boolean;",
        ),
        RegexPatch(
            r"is_spell_in_range\(this: game_object, spell: number \| izi_spell \| "
            r"\{id:fun\(self\):integer\}\): boolean;",
            "is_spell_in_range(this: game_object, spell: number | izi_spell | "
            "{ id: (this: any) => number }): boolean;",
        ),
        EventHandlerSignatureFix(IZI_EVENT_HANDLERS),
        EventHandlerSignatureFix(
            ("on_key_release",),
            lead="key",
            callback="key: number | string, cb: (this: void, key: number | string) => void",
        ),
        RegexPatch(
            r"after\(this: void, seconds: number, fn: \(this: void\) => void\): "
            r"\(this: void\) => void;",
            "after(this: void, seconds: number, fn: (this: void) => void): () => void;",
        ),
        TupleReturnRestorer(IZI_TUPLE_FAMILIES),
    )
)

OW_MENU_API = PatchChain(
    (
        RegexPatch(r"opts\?: \{\):", "opts?: object):"),
        RegexPatch(r"opts\?: \{, ", "opts?: object, "),
    )
)

KICK_EXTERNAL_FILTERS_HELPER = PatchChain((RegexPatch(r", string\|nil: any,", ","),))

SPELL_SEQUENCE_HELPER = PatchChain(
    (
        RegexPatch(
            r"game_object \| \(this: void\) => game_object",
            "game_object | ((this: void) => game_object)",
        ),
        RegexPatch(r': string "([^"]+)";', r': "\1";'),
    )
)

MODULE_PATCHES: Dict[str, PatchChain] = {
    "common/izi_sdk": IZI_SDK,
    "common/ow_menu_api": OW_MENU_API,
    "common/utility/kick_external_filters_helper": KICK_EXTERNAL_FILTERS_HELPER,
    "common/utility/spell_sequence_helper": SPELL_SEQUENCE_HELPER,
}


__all__ = ["IZI_TUPLE_FAMILIES", "MODULE_PATCHES"]
