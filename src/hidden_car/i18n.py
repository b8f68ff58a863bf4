"""English and Japanese strings for game log messages."""
from __future__ import annotations

from typing import Dict, List

LANG_JA: Dict[str, str] = {
    "game_started": "ゲーム開始!",
    "game_reset": "ゲームをリセットしました",
    "setup_turn": "警察: ヘリ{unit}を交差点に配置してください",
    "searcher_placed": "ヘリ{unit}を{square}に配置しました",
    "setup_done": "全てのヘリの配置が完了しました",
    "round_started": "--- ラウンド {round} ---",
    "evader_turn": "犯人のターンです",
    "evader_placed": "犯人が潜伏しました (ラウンド{round})",
    "evader_moved": "犯人が移動しました (ラウンド{round})",
    "searchers_turn": "警察のターンです",
    "unit_selected": "ヘリ{unit}を選択しました",
    "unit_moved": "ヘリ{unit}が{square}に移動しました",
    "trail_found": "痕跡を発見! (ラウンド{round})",
    "trail_known": "発見済みの痕跡です (ラウンド{round})",
    "nothing_found": "何も見つかりませんでした",
    "game_over": "ゲーム終了: {message}",
    "end_evader_found": "犯人の車を発見しました!",
    "end_round_limit": "犯人が逃げ切りました!",
    "end_encircled": "犯人が包囲されました!",
    "winner_evader": "犯人の勝利!",
    "winner_searchers": "警察の勝利!",
    "rejected": "実行できません: {detail}",
    "reason_out_of_range": "範囲外です",
    "reason_wrong_cell_kind": "そのマスでは実行できません",
    "reason_not_adjacent": "隣接するビルのみ調査できます",
    "reason_wrong_stride": "その距離には移動できません",
    "reason_occupied": "他のヘリコプターがいます",
    "reason_already_visited": "痕跡がある場所には移動できません",
    "reason_wrong_phase_or_role": "今は実行できません",
    "reason_unit_already_acted": "このヘリは行動済みです",
}

LANG_EN: Dict[str, str] = {
    "game_started": "Game started!",
    "game_reset": "Game reset",
    "setup_turn": "Searchers: place unit {unit} on an intersection",
    "searcher_placed": "Unit {unit} placed at {square}",
    "setup_done": "All searcher units are placed",
    "round_started": "--- Round {round} ---",
    "evader_turn": "Evader's turn",
    "evader_placed": "The evader went into hiding (round {round})",
    "evader_moved": "The evader moved (round {round})",
    "searchers_turn": "Searchers' turn",
    "unit_selected": "Unit {unit} selected",
    "unit_moved": "Unit {unit} moved to {square}",
    "trail_found": "Trail found! (round {round})",
    "trail_known": "Trail already known (round {round})",
    "nothing_found": "Nothing found",
    "game_over": "Game over: {message}",
    "end_evader_found": "The evader's car was found!",
    "end_round_limit": "The evader got away!",
    "end_encircled": "The evader is encircled!",
    "winner_evader": "Evader wins!",
    "winner_searchers": "Searchers win!",
    "rejected": "Rejected: {detail}",
    "reason_out_of_range": "outside the grid",
    "reason_wrong_cell_kind": "wrong kind of cell for this action",
    "reason_not_adjacent": "only diagonally adjacent buildings can be searched",
    "reason_wrong_stride": "target is not a legal distance away",
    "reason_occupied": "another unit is already there",
    "reason_already_visited": "the evader has already been there",
    "reason_wrong_phase_or_role": "not allowed right now",
    "reason_unit_already_acted": "this unit has already acted this turn",
}


_LANG_MAP: Dict[str, Dict[str, str]] = {"en": LANG_EN, "ja": LANG_JA}


def t(key: str, lang: str) -> str:
    """Translate a key for the provided language or raise when missing."""

    if lang not in _LANG_MAP:
        raise ValueError(f"Unsupported language '{lang}'")
    table = _LANG_MAP[lang]
    if key not in table:
        raise ValueError(f"Missing translation for key '{key}'")
    return table[key]


def tf(key: str, lang: str, **fields) -> str:
    return t(key, lang).format(**fields)


def available_langs() -> List[str]:
    return list(_LANG_MAP.keys())
