# ABOUTME: Battle round phases from Command through End of Turn, plus round and game endings.
# ABOUTME: End of Turn advances the match state and branches to the next turn, round or game end.

from battle_guide.models.guidance import (
    BoxVariant,
    BulletList,
    ContentNode,
    Divider,
    Header,
    InfoBox,
    KeyValue,
    MissionBlock,
    NumberedList,
    Paragraph,
    Table,
)
from battle_guide.models.match_state import MAX_BATTLE_ROUNDS, MatchState
from battle_guide.phases.base import BattlePhase, Phase
from battle_guide.phases.mission_text import (
    end_of_round_scoring_lines,
    end_of_turn_scoring_lines,
    has_end_of_round_scoring,
    has_end_of_turn_scoring,
    mission_action_lines,
    primary_scoring_lines,
    secondary_scoring_lines,
)

# Round from which VP are scored in the Command phase
FIRST_SCORING_ROUND = 2

ROUND_FIVE_NOTE = "If going second, score VP at end of your turn instead!"


def _strategic_reserves_rule(current_round: int) -> str:
    if current_round <= 1:
        return "Cannot arrive yet"
    if current_round == 2:
        return 'Wholly within 6" of any edge (NOT enemy deployment zone)'
    return 'Wholly within 6" of any battlefield edge'


class CommandPhase(BattlePhase):
    """Both players gain CP, then Battle-shock tests"""

    display_name = "COMMAND PHASE"

    def display_guidance(self, state: MatchState) -> str:
        return "\n".join([
            "1. COMMAND",
            "   Both players gain 1 CP (track on your roster)",
            "   Resolve any other Command phase rules",
            "",
            "2. BATTLE-SHOCK TESTS",
            "   Test each unit that is Below Half-strength",
            "   Roll 2D6: pass if >= unit's best Leadership",
            "",
            "   Failed units are Battle-shocked until your next Command phase:",
            "     - OC becomes 0",
            "     - Cannot be affected by your Stratagems",
            "     - Must take Desperate Escape tests if Falling Back",
        ])

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        return [
            NumberedList(items=[
                "COMMAND - Both players gain 1 CP (track on your roster) and resolve any other Command phase rules",
                "BATTLE-SHOCK TESTS - Test each unit that is Below Half-strength: "
                "roll 2D6 and pass if the result is at least the unit's best Leadership",
            ]),
            InfoBox(
                title="Battle-shocked Units",
                children=[
                    Paragraph(text="Failed units are Battle-shocked until your next Command phase:"),
                    BulletList(items=[
                        "OC becomes 0",
                        "Cannot be affected by your Stratagems",
                        "Must take Desperate Escape tests if Falling Back",
                    ]),
                ],
                variant=BoxVariant.WARNING,
            ),
        ]

    def next_phase(self, state: MatchState) -> Phase:
        if state.current_round >= FIRST_SCORING_ROUND:
            return VPScoringPhase()
        return MovementPhase()


class VPScoringPhase(BattlePhase):
    """Reminds players how their selected missions score this turn"""

    display_name = "VP SCORING"

    def display_guidance(self, state: MatchState) -> str:
        lines = ["Check VP scoring for your selected missions!", ""]

        if state.primary_mission is not None:
            lines.append(f"═══ PRIMARY: {state.primary_mission.name.upper()} ═══")
            lines.append("")
            lines.extend(f"  {line}" for line in primary_scoring_lines(state.primary_mission.full_text))
            lines.append("")
        else:
            lines.append("No primary mission selected!")

        secondaries = [
            ("ATTACKER", state.attacker_secondary_mission, state.attacker_player_number),
            ("DEFENDER", state.defender_secondary_mission, state.defender_player_number),
        ]
        for role, mission, player in secondaries:
            if mission is None:
                continue
            lines.append(f"═══ {role} SECONDARY: {mission.name.upper()} ═══")
            lines.append(f"(Player {player})")
            lines.append("")
            lines.extend(f"  {line}" for line in secondary_scoring_lines(mission.full_text))
            lines.append("")

        lines.append("Reminder:")
        lines.append('  Control = your total OC within 3" exceeds opponent\'s total OC')
        lines.append("  OC is 0 for Battle-shocked units")

        if state.current_round == MAX_BATTLE_ROUNDS:
            lines.append("")
            lines.append(f"ROUND 5 NOTE: {ROUND_FIVE_NOTE}")

        return "\n".join(lines)

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        content: list[ContentNode] = [Paragraph(text="Check VP scoring for your selected missions!")]

        if state.primary_mission is not None:
            content.append(
                MissionBlock(
                    mission_name=state.primary_mission.name,
                    scoring_rules=_scoring_rules(primary_scoring_lines(state.primary_mission.full_text)),
                )
            )
        else:
            content.append(Paragraph(text="No primary mission selected!"))

        if state.attacker_secondary_mission is not None:
            content.append(
                MissionBlock(
                    mission_name=state.attacker_secondary_mission.name,
                    player=f"Player {state.attacker_player_number} (ATTACKER)",
                    scoring_rules=_scoring_rules(
                        secondary_scoring_lines(state.attacker_secondary_mission.full_text)
                    ),
                )
            )

        if state.defender_secondary_mission is not None:
            content.append(
                MissionBlock(
                    mission_name=state.defender_secondary_mission.name,
                    player=f"Player {state.defender_player_number} (DEFENDER)",
                    scoring_rules=_scoring_rules(
                        secondary_scoring_lines(state.defender_secondary_mission.full_text)
                    ),
                )
            )

        content.append(
            InfoBox(
                title="Reminder",
                children=[
                    BulletList(items=[
                        'Control = your total OC within 3" exceeds opponent\'s total OC',
                        "OC is 0 for Battle-shocked units",
                    ])
                ],
                variant=BoxVariant.REMINDER,
            )
        )

        if state.current_round == MAX_BATTLE_ROUNDS:
            content.append(
                InfoBox(
                    title="Round 5 Note",
                    children=[Paragraph(text=ROUND_FIVE_NOTE)],
                    variant=BoxVariant.WARNING,
                )
            )

        return content

    def next_phase(self, state: MatchState) -> Phase:
        return MovementPhase()


def _scoring_rules(lines: list[str]) -> list[ContentNode]:
    if not lines:
        return [Paragraph(text="See the mission card for scoring rules.")]
    return [BulletList(items=lines)]


class MovementPhase(BattlePhase):
    display_name = "MOVEMENT PHASE"

    def display_guidance(self, state: MatchState) -> str:
        return "\n".join([
            "For each unit, choose one:",
            "",
            "  REMAIN STATIONARY - No movement (Heavy weapons get +1 to Hit)",
            '  NORMAL MOVE - Move up to M"',
            '  ADVANCE - Move up to M+D6" (cannot shoot or charge this turn)',
            '  FALL BACK - Move up to M" out of Engagement Range (cannot shoot or charge)',
            "",
            "Movement Rules:",
            '  Unit Coherency: 2" horizontal, 5" vertical (7+ models need 2 connections)',
            '  Cannot move within Engagement Range of enemies (1" horiz, 5" vert)',
            '  Terrain 2" or less can be moved over freely',
            "",
            "REINFORCEMENTS:",
            "  Set up any Reserves units now",
            '  Deep Strike: More than 9" from all enemies',
            "  Strategic Reserves:",
            f"    Round {state.current_round}: {_strategic_reserves_rule(state.current_round)}",
            '    Always: More than 9" from all enemies',
        ])

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        return [
            Paragraph(text="For each unit, choose one:"),
            KeyValue(pairs=[
                ("REMAIN STATIONARY", "No movement (Heavy weapons get +1 to Hit)"),
                ("NORMAL MOVE", 'Move up to M"'),
                ("ADVANCE", 'Move up to M+D6" (cannot shoot or charge this turn)'),
                ("FALL BACK", 'Move up to M" out of Engagement Range (cannot shoot or charge)'),
            ]),
            InfoBox(
                title="Movement Rules",
                children=[
                    BulletList(items=[
                        'Unit Coherency: 2" horizontal, 5" vertical (7+ models need 2 connections)',
                        'Cannot move within Engagement Range of enemies (1" horiz, 5" vert)',
                        'Terrain 2" or less can be moved over freely',
                    ])
                ],
                variant=BoxVariant.REMINDER,
            ),
            Header(text="Reinforcements", level=2),
            BulletList(items=[
                "Set up any Reserves units now",
                'Deep Strike: More than 9" from all enemies',
            ]),
            KeyValue(pairs=[
                (f"Strategic Reserves (Round {state.current_round})", _strategic_reserves_rule(state.current_round)),
                ("Always", 'More than 9" from all enemies'),
            ]),
        ]

    def next_phase(self, state: MatchState) -> Phase:
        return ShootingPhase()


WOUND_ROLL_TABLE = [
    ["S >= 2x T", "2+"],
    ["S > T", "3+"],
    ["S = T", "4+"],
    ["S < T", "5+"],
    ["S <= T/2", "6+"],
]


class ShootingPhase(BattlePhase):
    """Ranged attacks, plus any primary mission action that starts here"""

    display_name = "SHOOTING PHASE"

    def _action_lines(self, state: MatchState) -> list[str]:
        mission = state.primary_mission
        if mission is None or not mission.has_action:
            return []
        return mission_action_lines(mission.full_text)

    def display_guidance(self, state: MatchState) -> str:
        wound_rolls = "  |  ".join(f"{matchup}: {roll}" for matchup, roll in WOUND_ROLL_TABLE)
        lines = [
            "For each eligible unit:",
            "",
            "1. SELECT TARGETS",
            "   Must be visible and within weapon range",
            "   Cannot target units in Engagement Range (except PISTOL weapons)",
            "",
            "2. MAKE RANGED ATTACKS",
            "   Hit Roll: Roll D6 >= BS (unmodified 6 always hits)",
            "   Wound Roll: Compare S vs T",
            f"     {wound_rolls}",
            "   Save: Roll D6 + AP >= Sv (invuln saves ignore AP)",
            "   Damage: Reduce Wounds, excess does not carry over (except Mortal Wounds)",
            "",
            "BIG GUNS NEVER TIRE:",
            "  Monsters/Vehicles in Engagement Range CAN shoot",
            "  -1 to Hit with ranged attacks (except PISTOL)",
            "  Can only target units they're in Engagement Range of (or PISTOL)",
        ]

        action_lines = self._action_lines(state)
        if action_lines:
            lines.append("")
            lines.append("MISSION ACTIONS (start in Shooting phase):")
            lines.extend(f"  {line}" for line in action_lines)

        return "\n".join(lines)

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        content: list[ContentNode] = [
            Paragraph(text="For each eligible unit:"),
            NumberedList(items=[
                "SELECT TARGETS - Must be visible and within weapon range; "
                "cannot target units in Engagement Range (except PISTOL weapons)",
                "MAKE RANGED ATTACKS - Hit roll, wound roll, saving throw, then damage",
            ]),
            KeyValue(pairs=[
                ("Hit Roll", "Roll D6 >= BS (unmodified 6 always hits)"),
                ("Wound Roll", "Compare S vs T (see table)"),
                ("Save", "Roll D6 + AP >= Sv (invulnerable saves ignore AP)"),
                ("Damage", "Reduce Wounds, excess does not carry over (except Mortal Wounds)"),
            ]),
            Table(headers=["S vs T", "Wound Roll"], rows=[list(row) for row in WOUND_ROLL_TABLE]),
            InfoBox(
                title="Big Guns Never Tire",
                children=[
                    BulletList(items=[
                        "Monsters/Vehicles in Engagement Range CAN shoot",
                        "-1 to Hit with ranged attacks (except PISTOL)",
                        "Can only target units they're in Engagement Range of (or PISTOL)",
                    ])
                ],
                variant=BoxVariant.INFO,
            ),
        ]

        action_lines = self._action_lines(state)
        if action_lines:
            content.append(
                InfoBox(
                    title="Mission Actions (start in Shooting phase)",
                    children=[BulletList(items=action_lines)],
                    variant=BoxVariant.REMINDER,
                )
            )

        return content

    def next_phase(self, state: MatchState) -> Phase:
        return ChargePhase()


class ChargePhase(BattlePhase):
    display_name = "CHARGE PHASE"

    def display_guidance(self, state: MatchState) -> str:
        return "\n".join([
            "1. SELECT UNIT TO CHARGE",
            '   Must be within 12" of at least one enemy',
            "   Cannot be in Engagement Range already",
            "   Cannot have Advanced or Fell Back this turn",
            "",
            "2. SELECT CHARGE TARGETS",
            '   Must be within 12" of charging unit',
            "   Can select multiple targets",
            "",
            "3. ENEMY REACTS (FIRE OVERWATCH)",
            "   Opponent may use Fire Overwatch Stratagem (1 CP)",
            "   Requires 6s to hit, can only use once per turn",
            "",
            "4. MAKE CHARGE ROLL",
            "   Roll 2D6 = maximum charge distance",
            "   SUCCESS: End move within Engagement Range of ALL targets",
            "   FAILURE: Unit does not move",
            "",
            "CHARGE BONUS:",
            "  Successful chargers fight first in Fight phase",
        ])

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        return [
            NumberedList(items=[
                'SELECT UNIT TO CHARGE - Must be within 12" of an enemy, '
                "not already in Engagement Range, and must not have Advanced or Fallen Back this turn",
                'SELECT CHARGE TARGETS - Any enemy units within 12" of the charging unit',
                "ENEMY REACTS - Opponent may use the Fire Overwatch Stratagem (1 CP, hits on 6s, once per turn)",
                "MAKE CHARGE ROLL - Roll 2D6 for the maximum charge distance",
            ]),
            KeyValue(pairs=[
                ("SUCCESS", "End move within Engagement Range of ALL targets"),
                ("FAILURE", "Unit does not move"),
            ]),
            InfoBox(
                title="Charge Bonus",
                children=[Paragraph(text="Successful chargers fight first in the Fight phase.")],
                variant=BoxVariant.SUCCESS,
            ),
        ]

    def next_phase(self, state: MatchState) -> Phase:
        return FightPhase()


class FightPhase(BattlePhase):
    display_name = "FIGHT PHASE"

    def display_guidance(self, state: MatchState) -> str:
        return "\n".join([
            "FIGHT ORDER:",
            "",
            "1. FIGHTS FIRST STEP",
            "   Units that charged this turn",
            "   Units with Fights First ability",
            "   Alternate selecting units (starting with player whose turn it is)",
            "",
            "2. REMAINING COMBATS",
            "   All other eligible units",
            "   Alternate selecting (starting with player whose turn it is NOT)",
            "",
            "FOR EACH FIGHTING UNIT:",
            "",
            '  A. PILE IN (3")',
            '     Move each model up to 3" closer to nearest enemy',
            "     Must end in Unit Coherency",
            "",
            "  B. MAKE MELEE ATTACKS",
            "     Must be within Engagement Range OR in base contact with",
            "     friendly model that's in base contact with enemy",
            "     Same attack sequence as shooting (Hit -> Wound -> Save -> Damage)",
            "",
            '  C. CONSOLIDATE (3")',
            '     Move up to 3" closer to nearest enemy',
            "     Must end within Engagement Range of an enemy if possible",
            "     Or move toward closest objective if cannot reach enemy",
        ])

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        return [
            Header(text="Fight Order", level=2),
            NumberedList(items=[
                "FIGHTS FIRST - Units that charged this turn and units with Fights First; "
                "alternate starting with the player whose turn it is",
                "REMAINING COMBATS - All other eligible units; "
                "alternate starting with the player whose turn it is NOT",
            ]),
            Divider(),
            Header(text="For Each Fighting Unit", level=3),
            KeyValue(pairs=[
                ("Pile In", 'Move each model up to 3" closer to the nearest enemy, ending in Unit Coherency'),
                ("Make Melee Attacks", "Same sequence as shooting (Hit -> Wound -> Save -> Damage)"),
                ("Consolidate", 'Move up to 3" closer to the nearest enemy, or toward the closest objective'),
            ]),
            InfoBox(
                title="Eligible Models",
                children=[
                    Paragraph(
                        text="A model can fight if it is within Engagement Range, or in base contact "
                             "with a friendly model that is in base contact with an enemy."
                    )
                ],
                variant=BoxVariant.REMINDER,
            ),
        ]

    def next_phase(self, state: MatchState) -> Phase:
        return EndOfTurnPhase()


class EndOfTurnPhase(BattlePhase):
    """Closes the active player's turn and hands over, possibly ending the round"""

    display_name = "END OF TURN"

    def _scoring_lines(self, state: MatchState) -> list[str]:
        mission = state.primary_mission
        if mission is None or not has_end_of_turn_scoring(mission.full_text):
            return []
        return end_of_turn_scoring_lines(mission.full_text)

    def display_guidance(self, state: MatchState) -> str:
        lines = [f"Player {state.active_player_number}'s turn is ending.", ""]

        scoring_lines = self._scoring_lines(state)
        if scoring_lines:
            lines.append("CHECK END-OF-TURN VP SCORING:")
            lines.extend(f"  {line}" for line in scoring_lines)
            lines.append("")

        lines.append("Complete any end-of-turn effects and proceed to next turn.")
        return "\n".join(lines)

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        content: list[ContentNode] = [
            Paragraph(text=f"Player {state.active_player_number}'s turn is ending.")
        ]

        scoring_lines = self._scoring_lines(state)
        if scoring_lines:
            content.append(
                InfoBox(
                    title="Check End-of-Turn VP Scoring",
                    children=[BulletList(items=scoring_lines)],
                    variant=BoxVariant.REMINDER,
                )
            )

        content.append(Paragraph(text="Complete any end-of-turn effects and proceed to next turn."))
        return content

    def next_phase(self, state: MatchState) -> Phase:
        new_round_started = state.advance_to_next_turn()

        if state.is_game_over():
            return EndGamePhase()

        if new_round_started:
            return EndOfRoundPhase(completed_round=state.current_round - 1)

        return CommandPhase()


class EndOfRoundPhase(BattlePhase):
    """Between rounds; shows end-of-round mission scoring when the primary has any"""

    display_name = "END OF ROUND"

    completed_round: int

    @property
    def name(self) -> str:
        return f"END OF ROUND {self.completed_round}"

    def display_guidance(self, state: MatchState) -> str:
        lines = [f"Battle Round {self.completed_round} complete!", ""]

        mission = state.primary_mission
        if mission is not None and has_end_of_round_scoring(mission.full_text):
            lines.append("CHECK END-OF-ROUND VP SCORING:")
            lines.extend(f"  {line}" for line in end_of_round_scoring_lines(mission.full_text))
            lines.append("")

        if self.completed_round < MAX_BATTLE_ROUNDS:
            lines.append(f"Proceeding to Battle Round {self.completed_round + 1}...")

        return "\n".join(lines)

    def next_phase(self, state: MatchState) -> Phase:
        if state.is_game_over():
            return EndGamePhase()
        return CommandPhase()


class EndGamePhase(BattlePhase):
    """Terminal phase; its successor is itself"""

    display_name = "END OF GAME"

    def display_guidance(self, state: MatchState) -> str:
        lines = [
            "THE BATTLE HAS ENDED!",
            "",
            "Final VP Tallying:",
            "  1. Count all VP scored during the game",
            "  2. Check for any end-of-game bonuses",
            "",
        ]

        if state.primary_mission is not None:
            lines.append(f"Mission: {state.primary_mission.name}")
            lines.append("")

        lines.extend([
            "DETERMINE VICTOR:",
            "  If one army was destroyed: Their opponent wins",
            "  Otherwise: Player with most VP wins",
            "  Tie: The game is a draw",
            "",
            "Thank you for playing!",
        ])
        return "\n".join(lines)

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        content: list[ContentNode] = [
            Header(text="THE BATTLE HAS ENDED!", level=1),
            InfoBox(
                title="Final VP Tallying",
                children=[
                    NumberedList(items=[
                        "Count all VP scored during the game",
                        "Check for any end-of-game bonuses",
                    ])
                ],
                variant=BoxVariant.INFO,
            ),
        ]

        if state.primary_mission is not None:
            content.append(KeyValue(pairs=[("Mission", state.primary_mission.name)]))

        content.extend([
            Header(text="Determine Victor", level=2),
            BulletList(items=[
                "If one army was destroyed: their opponent wins",
                "Otherwise: the player with the most VP wins",
                "Tie: the game is a draw",
            ]),
            InfoBox(
                children=[Paragraph(text="Thank you for playing!")],
                variant=BoxVariant.SUCCESS,
            ),
        ])
        return content

    def next_phase(self, state: MatchState) -> Phase:
        return self
