# ABOUTME: Terminal driver that walks two players through a battle one phase at a time.
# ABOUTME: Command parsing, banner/help/status formatting and the read-eval loop over the phase graph.

from dataclasses import dataclass
from enum import Enum

from loguru import logger

from battle_guide.models.match_state import MatchState
from battle_guide.models.mission import MissionCatalog
from battle_guide.phases import BattlePhase, EndGamePhase, Phase, entry_phase
from battle_guide.utils.logging import log_phase_transition

# ============================================================================
# Command Types
# ============================================================================


class GuideCommandType(str, Enum):
    """Commands understood at every prompt"""
    QUIT = "quit"
    HELP = "help"
    STATUS = "status"
    CONTINUE = "continue"  # Empty input
    CHOICE = "choice"  # Anything else; interpreted by the current phase


@dataclass
class ParsedCommand:
    """Parsed command with its type and the trimmed input"""
    command_type: GuideCommandType
    raw_input: str


# ============================================================================
# Command Parser
# ============================================================================


class GuideCommandParser:
    """
    Parser for guide commands.

    Supports:
    - quit, q, exit
    - help, h, ?
    - status, s
    - empty input (continue)
    - anything else is passed to the phase as a choice
    """

    COMMAND_ALIASES = {
        "quit": GuideCommandType.QUIT,
        "q": GuideCommandType.QUIT,
        "exit": GuideCommandType.QUIT,
        "help": GuideCommandType.HELP,
        "h": GuideCommandType.HELP,
        "?": GuideCommandType.HELP,
        "status": GuideCommandType.STATUS,
        "s": GuideCommandType.STATUS,
    }

    def parse(self, user_input: str) -> ParsedCommand:
        text = user_input.strip()
        if not text:
            return ParsedCommand(command_type=GuideCommandType.CONTINUE, raw_input="")

        command_type = self.COMMAND_ALIASES.get(text.lower(), GuideCommandType.CHOICE)
        return ParsedCommand(command_type=command_type, raw_input=text)


# ============================================================================
# Output Formatter
# ============================================================================


class CLIFormatter:
    """Formats banners, phase guidance, help and status for the terminal"""

    HEADER_BORDER = "═"
    BANNER_WIDTH = 55

    def _rule(self) -> str:
        return self.HEADER_BORDER * self.BANNER_WIDTH

    def format_header(self) -> str:
        """Banner shown once when the guide starts"""
        return "\n".join([
            "",
            self._rule(),
            "  WARHAMMER 40,000 GAME GUIDE",
            self._rule(),
            "",
            "Commands: 'quit' to exit, 'help' for help, 'status' for game status",
            "",
        ])

    def format_catalog_summary(self, catalog: MissionCatalog) -> str:
        lines = []
        for kind, missions in (
            ("primary", catalog.primary_missions),
            ("secondary", catalog.secondary_missions),
        ):
            if missions:
                lines.append(f"Loaded {len(missions)} {kind} missions.")
            else:
                lines.append(f"Warning: No {kind} missions loaded.")
        return "\n".join(lines)

    def format_phase(self, phase: Phase, state: MatchState) -> str:
        """Phase banner (with the turn label during battle) followed by its guidance"""
        lines = ["", self._rule()]
        if isinstance(phase, BattlePhase) and not isinstance(phase, EndGamePhase):
            lines.append(f"── {state.current_turn_display()} ──")
        lines.extend([
            f"── {phase.name} ──",
            self._rule(),
            "",
            phase.display_guidance(state),
        ])
        return "\n".join(lines)

    def format_prompt(self, phase: Phase) -> str:
        if phase.requires_input():
            return "Enter choice: "
        return "[Press Enter to continue, or type a command] "

    def format_help(self) -> str:
        return "\n".join([
            "",
            "═══ HELP ═══",
            "",
            "Commands:",
            "  quit, q, exit  - Exit the game guide",
            "  help, h, ?     - Show this help",
            "  status, s      - Show current game status",
            "  [Enter]        - Advance to next phase",
            "",
            "When prompted for a choice, enter the number of your selection.",
            "",
        ])

    def format_status(self, state: MatchState) -> str:
        lines = [
            "",
            "═══ GAME STATUS ═══",
            "",
            f"Battle Size: {state.battle_size.label.upper()} ({state.battle_size.points} pts)",
            f"Battlefield: {state.battle_size.battlefield}",
            "",
        ]

        if state.primary_mission is not None:
            lines.append(f"Primary Mission: {state.primary_mission.name}")
        else:
            lines.append("Primary Mission: Not selected")
        if state.attacker_secondary_mission is not None:
            lines.append(f"Attacker Secondary: {state.attacker_secondary_mission.name}")
        if state.defender_secondary_mission is not None:
            lines.append(f"Defender Secondary: {state.defender_secondary_mission.name}")
        lines.append("")

        if state.battle_started:
            lines.extend([
                f"Current Round: {state.current_round}",
                f"Active Player: Player {state.active_player_number}",
                f"Attacker: Player {state.attacker_player_number}",
                f"Defender: Player {state.defender_player_number}",
                f"First Player: Player {state.first_player_number}",
            ])
        else:
            lines.append("Game has not started yet (still in setup)")
        lines.append("")
        return "\n".join(lines)


# ============================================================================
# CLI Interface
# ============================================================================


class GuideCommandLineInterface:
    """
    Terminal session for one match.

    The loop shows the current phase, reads one line and either runs a
    command or feeds the line to the phase. It stops on quit, end of input,
    or when the end of game is reached (shown once, then the loop exits).
    """

    def __init__(self, catalog: MissionCatalog | None = None, state: MatchState | None = None):
        """
        Args:
            catalog: Missions offered during setup (default: none)
            state: Match record to drive (default: a fresh one)
        """
        self.parser = GuideCommandParser()
        self.formatter = CLIFormatter()
        self.catalog = catalog or MissionCatalog()
        self.state = state or MatchState()
        self.current_phase: Phase = entry_phase(self.catalog)
        self._should_exit = False

    def handle_command(self, parsed: ParsedCommand) -> dict:
        """
        Execute a parsed command against the current phase.

        Returns:
            Result dict with success, command_type and optionally output,
            next_phase and should_exit
        """
        if parsed.command_type == GuideCommandType.QUIT:
            return {
                "success": True,
                "command_type": parsed.command_type,
                "output": "\nExiting game guide. Thanks for playing!",
                "should_exit": True,
            }
        elif parsed.command_type == GuideCommandType.HELP:
            return {
                "success": True,
                "command_type": parsed.command_type,
                "output": self.formatter.format_help(),
            }
        elif parsed.command_type == GuideCommandType.STATUS:
            return {
                "success": True,
                "command_type": parsed.command_type,
                "output": self.formatter.format_status(self.state),
            }

        phase = self.current_phase
        if not phase.requires_input():
            # Enter, or any other text, moves a guidance-only phase along
            return {
                "success": True,
                "command_type": parsed.command_type,
                "next_phase": phase.next_phase(self.state),
            }

        if parsed.command_type == GuideCommandType.CONTINUE:
            return {
                "success": False,
                "command_type": parsed.command_type,
                "output": "Please enter a valid choice.",
            }

        next_phase = phase.process_input(parsed.raw_input, self.state)
        if next_phase is None:
            return {
                "success": False,
                "command_type": parsed.command_type,
                "output": "Invalid choice. Please try again.",
            }
        return {
            "success": True,
            "command_type": parsed.command_type,
            "next_phase": next_phase,
        }

    def _transition(self, next_phase: Phase) -> None:
        log_phase_transition(
            from_phase=self.current_phase.name,
            to_phase=next_phase.name,
            round_number=self.state.current_round,
        )
        self.current_phase = next_phase

    def run(self) -> None:
        """Main loop; returns when the game ends or the players quit"""
        print(self.formatter.format_header())

        while not self._should_exit and not isinstance(self.current_phase, EndGamePhase):
            print(self.formatter.format_phase(self.current_phase, self.state))
            print()

            try:
                user_input = input(self.formatter.format_prompt(self.current_phase))
            except EOFError:
                logger.debug("End of input, leaving the guide")
                break

            result = self.handle_command(self.parser.parse(user_input))
            if "output" in result:
                print(result["output"])
            if result.get("should_exit"):
                self._should_exit = True
            if "next_phase" in result:
                self._transition(result["next_phase"])

        if isinstance(self.current_phase, EndGamePhase):
            print(self.formatter.format_phase(self.current_phase, self.state))
