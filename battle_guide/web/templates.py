# ABOUTME: HTML page templates for the web guide: layout, home page, phase view and status sidebar.
# ABOUTME: Pages are assembled as escaped strings; guidance bodies come from the content-node renderer.

from html import escape

from battle_guide.models.match_state import MAX_BATTLE_ROUNDS
from battle_guide.phases import BattlePhase, EndGamePhase, MusterArmies
from battle_guide.rendering import render_html
from battle_guide.session.snapshot_store import GameSession

HTMX_SCRIPT_URL = "https://unpkg.com/htmx.org@1.9.10"

PAGE_TITLE = "Warhammer 40K Game Guide"

STYLESHEET = """
:root {
    --bg: #111111;
    --panel: #1c1c1c;
    --text: #f2f2f2;
    --muted: #9a9a9a;
    --accent: #c9a227;
    --info: #3d7bd9;
    --warning: #d9822b;
    --success: #3fa34d;
    --reminder: #8e6bd1;
}
body { background: var(--bg); color: var(--text); font-family: system-ui, sans-serif; margin: 0; }
main { max-width: 1100px; margin: 0 auto; padding: 1.5rem; }
a { color: var(--accent); }
button { background: var(--accent); border: none; color: #111; padding: 0.6rem 1.2rem; cursor: pointer; }
button.secondary { background: transparent; color: var(--text); border: 1px solid var(--muted); }
.hero-section { text-align: center; padding: 4rem 1rem; }
.game-layout { display: grid; grid-template-columns: 1fr 280px; gap: 1.5rem; }
.phase-content, .status-sidebar article { background: var(--panel); padding: 1.25rem; }
.turn-info { color: var(--accent); letter-spacing: 0.05em; }
.choice-group { display: flex; flex-direction: column; gap: 0.5rem; }
.action-buttons { display: flex; gap: 0.75rem; margin-top: 1rem; }
.status-item { display: flex; justify-content: space-between; padding: 0.2rem 0; }
.status-label { color: var(--muted); }
.info-box { border-left: 4px solid var(--info); padding: 0.5rem 1rem; margin: 1rem 0; }
.info-box.warning { border-color: var(--warning); }
.info-box.success { border-color: var(--success); }
.info-box.reminder { border-color: var(--reminder); }
.info-box-title { font-weight: 700; margin-bottom: 0.25rem; }
.key-value-item { display: flex; gap: 1rem; padding: 0.2rem 0; }
.key-value-key { font-weight: 700; min-width: 180px; }
.guidance-table { border-collapse: collapse; margin: 1rem 0; }
.guidance-table th, .guidance-table td { border: 1px solid #333; padding: 0.3rem 0.8rem; }
.mission-block { border: 1px solid var(--accent); padding: 0.75rem 1rem; margin: 1rem 0; }
.mission-block-header { font-weight: 700; text-transform: uppercase; color: var(--accent); }
.mission-player { color: var(--muted); }
.guidance-divider { border: none; border-top: 1px solid #333; margin: 1.25rem 0; }
.guidance-spacer { height: 1rem; }
.htmx-indicator { display: none; }
.htmx-request .htmx-indicator { display: inline; }
"""


def _text(value: str) -> str:
    return escape(value, quote=False)


def render_layout(body: str, title: str = PAGE_TITLE) -> str:
    """Wrap page content in the shared document shell"""
    return (
        "<!DOCTYPE html>"
        "<html lang='en'><head>"
        "<meta charset='utf-8'>"
        "<meta name='viewport' content='width=device-width, initial-scale=1'>"
        f"<title>{_text(title)}</title>"
        f"<script src='{HTMX_SCRIPT_URL}'></script>"
        f"<style>{STYLESHEET}</style>"
        "</head><body>"
        f"<main>{body}</main>"
        "</body></html>"
    )


def render_home_page(session: GameSession) -> str:
    continue_link = ""
    if not isinstance(session.current_phase, MusterArmies):
        continue_link = f"<p><a href='/phase?v={session.version}'>Continue Current Game</a></p>"

    return (
        "<section class='hero-section'>"
        "<h1>Warhammer 40,000</h1>"
        "<h2>Game Guide</h2>"
        "<p>A step-by-step guide through the phases of battle</p>"
        "<form method='post' action='/start'>"
        "<button type='submit'>Start New Game</button>"
        "</form>"
        f"{continue_link}"
        "</section>"
    )


def _htmx_attrs(url: str) -> str:
    return (
        f"hx-post='{url}' hx-target='#phase-content' "
        "hx-swap='innerHTML' hx-indicator='.htmx-indicator'"
    )


def _version_input(version: int) -> str:
    return f"<input type='hidden' name='version' value='{version}'>"


def _render_choices(session: GameSession) -> str:
    options = session.current_phase.choices(session.state)
    if not options:
        return (
            "<p class='no-choices'>No options are available for this step.</p>"
            + _render_restart_button(session.version)
        )

    buttons = "".join(
        "<button type='submit' class='choice-button secondary' name='choice' "
        f"value='{escape(value, quote=True)}'>{_text(label)}</button>"
        for value, label in options
    )
    return (
        f"<form class='choice-group' method='post' action='/phase/select' {_htmx_attrs('/phase/select')}>"
        f"{_version_input(session.version)}"
        f"{buttons}"
        "</form>"
    )


def _render_restart_button(version: int) -> str:
    return (
        "<form method='post' action='/reset' "
        "hx-post='/reset' hx-confirm='Are you sure you want to restart the game?'>"
        f"{_version_input(version)}"
        "<button type='submit' class='secondary'>Restart Game</button>"
        "</form>"
    )


def _render_continue(version: int) -> str:
    return (
        "<div class='action-buttons'>"
        f"<form method='post' action='/phase/advance' {_htmx_attrs('/phase/advance')}>"
        f"{_version_input(version)}"
        "<button type='submit'>Continue</button>"
        "</form>"
        f"{_render_restart_button(version)}"
        "</div>"
    )


def _render_end_game(version: int) -> str:
    return (
        "<div class='action-buttons'>"
        "<a href='/'><button type='button'>Return Home</button></a>"
        "<form method='post' action='/reset' hx-post='/reset'>"
        f"{_version_input(version)}"
        "<button type='submit' class='secondary'>Play Again</button>"
        "</form>"
        "</div>"
    )


def render_phase_content(session: GameSession) -> str:
    """The phase article: title, turn label, guidance and the action area"""
    phase = session.current_phase
    state = session.state

    turn_info = ""
    if isinstance(phase, BattlePhase) and not isinstance(phase, EndGamePhase):
        turn_info = f"<p class='turn-info'>{_text(state.current_turn_display())}</p>"

    if phase.requires_input():
        actions = _render_choices(session)
    elif isinstance(phase, EndGamePhase):
        actions = _render_end_game(session.version)
    else:
        actions = _render_continue(session.version)

    return (
        "<article class='phase-content'>"
        "<header class='phase-header'>"
        f"<h2>{_text(phase.name)}</h2>"
        f"{turn_info}"
        "<span class='htmx-indicator'>Loading...</span>"
        "</header>"
        f"<div class='guidance-content'>{render_html(phase.display_structured_guidance(state))}</div>"
        f"<footer>{actions}</footer>"
        "</article>"
    )


def _status_item(label: str, value: str) -> str:
    return (
        "<div class='status-item'>"
        f"<span class='status-label'>{_text(label)}</span>"
        f"<span>{_text(value)}</span>"
        "</div>"
    )


def render_game_status(session: GameSession) -> str:
    """Sidebar with battle size, round and player roles"""
    state = session.state
    parts = [
        "<article><header><h3>Game Status</h3></header>",
        _status_item("Battle Size", state.battle_size.label.upper()),
        _status_item("Points", f"{state.battle_size.points} pts"),
    ]

    if state.battle_started:
        parts.extend([
            "<hr>",
            _status_item("Round", f"{state.current_round} / {MAX_BATTLE_ROUNDS}"),
            _status_item("Active Player", f"Player {state.active_player_number}"),
            _status_item("Role", "ATTACKER" if state.is_attacker_turn else "DEFENDER"),
        ])

    if state.battle_started or state.attacker_player_number != 1:
        parts.extend([
            "<hr>",
            _status_item("Attacker", f"Player {state.attacker_player_number}"),
            _status_item("Defender", f"Player {state.defender_player_number}"),
        ])
        if state.battle_started:
            parts.append(_status_item("First Player", f"Player {state.first_player_number}"))

    if state.primary_mission is not None:
        parts.extend(["<hr>", _status_item("Primary Mission", state.primary_mission.name)])

    parts.append("</article>")
    return "".join(parts)


def render_phase_view(session: GameSession) -> str:
    return (
        "<div class='game-layout'>"
        f"<div id='phase-content'>{render_phase_content(session)}</div>"
        f"<aside class='status-sidebar' id='status-sidebar'>{render_game_status(session)}</aside>"
        "</div>"
    )
