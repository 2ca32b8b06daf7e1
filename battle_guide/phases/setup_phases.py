# ABOUTME: Pre-battle phases: battle size, missions, roles, deployment and the first-turn roll-off.
# ABOUTME: Mission selection validates against the injected MissionCatalog carried by each phase.

from abc import abstractmethod
from enum import Enum
from typing import ClassVar

from battle_guide.models.guidance import (
    BoxVariant,
    BulletList,
    ContentNode,
    FormattedText,
    InfoBox,
    KeyValue,
    MissionBlock,
    NumberedList,
    Paragraph,
    Table,
)
from battle_guide.models.match_state import BattleSize, MatchState
from battle_guide.models.mission import MissionRecord, MissionType
from battle_guide.phases.base import Phase, SetupPhase, parse_choice
from battle_guide.phases.battle_phases import CommandPhase


def _mission_label(mission: MissionRecord) -> str:
    if mission.type == MissionType.PRIMARY_ASYMMETRIC:
        return f"{mission.name} (Asymmetric War)"
    if mission.type == MissionType.SECONDARY_FIXED:
        return f"{mission.name} (Fixed)"
    return mission.name


def _mission_menu(missions: tuple[MissionRecord, ...]) -> list[str]:
    return [f"{index}. {_mission_label(mission)}" for index, mission in enumerate(missions, start=1)]


def _no_missions_box(kind: str) -> InfoBox:
    return InfoBox(
        title="No Missions Loaded",
        children=[
            Paragraph(text=f"No {kind} missions are available."),
            Paragraph(text="Check the mission files and restart the guide."),
        ],
        variant=BoxVariant.WARNING,
    )


def _roll_off_choices(suffix: str) -> list[tuple[str, str]]:
    return [("1", f"Player 1 {suffix}"), ("2", f"Player 2 {suffix}")]


class MissionSlot(str, Enum):
    """Which mission a MissionDetails phase is showing"""
    PRIMARY = "primary"
    ATTACKER_SECONDARY = "attacker_secondary"
    DEFENDER_SECONDARY = "defender_secondary"


class MusterArmies(SetupPhase):
    """Entry phase: pick the battle size"""

    display_name = "MUSTER ARMIES"

    def display_guidance(self, state: MatchState) -> str:
        lines = ["Select battle size:", ""]
        for index, size in enumerate(BattleSize, start=1):
            lines.append(
                f"{index}. {size.label} ({size.points} pts, battlefield {size.battlefield}, {size.duration})"
            )
        return "\n".join(lines)

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        return [
            Table(
                headers=["Size", "Points", "Battlefield", "Duration"],
                rows=[
                    [size.label, f"{size.points} pts", size.battlefield, size.duration]
                    for size in BattleSize
                ],
            )
        ]

    def requires_input(self) -> bool:
        return True

    def choices(self, state: MatchState) -> list[tuple[str, str]]:
        return [
            (str(index), f"{index}. {size.label} ({size.points} pts)")
            for index, size in enumerate(BattleSize, start=1)
        ]

    def process_input(self, raw_input: str, state: MatchState) -> Phase | None:
        choice = parse_choice(raw_input, len(BattleSize))
        if choice is None:
            return None
        state.battle_size = BattleSize.from_choice(choice)
        return self.next_phase(state)

    def next_phase(self, state: MatchState) -> Phase:
        return self._follow(SelectPrimaryMission)


class SelectPrimaryMission(SetupPhase):
    display_name = "SELECT PRIMARY MISSION"

    def display_guidance(self, state: MatchState) -> str:
        missions = self.catalog.primary_missions
        if not missions:
            return "No primary missions are available.\nCheck the mission files and restart the guide."
        lines = ["Draw a card from the Primary Mission deck, then select it:", ""]
        lines.extend(_mission_menu(missions))
        return "\n".join(lines)

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        missions = self.catalog.primary_missions
        if not missions:
            return [_no_missions_box("primary")]
        return [
            Paragraph(text="Draw a card from the Primary Mission deck, then select it:"),
            NumberedList(items=[_mission_label(mission) for mission in missions]),
        ]

    def requires_input(self) -> bool:
        return True

    def choices(self, state: MatchState) -> list[tuple[str, str]]:
        return [
            (str(index), label)
            for index, label in enumerate(_mission_menu(self.catalog.primary_missions), start=1)
        ]

    def process_input(self, raw_input: str, state: MatchState) -> Phase | None:
        missions = self.catalog.primary_missions
        choice = parse_choice(raw_input, len(missions))
        if choice is None:
            return None
        mission = missions[choice - 1]
        state.primary_mission = mission
        return self._follow(MissionDetails, mission=mission, slot=MissionSlot.PRIMARY)

    def next_phase(self, state: MatchState) -> Phase:
        # Without a selection there is nowhere to go but back to the menu
        return self


class MissionDetails(SetupPhase):
    """Shows the full card of a mission that was just selected"""

    display_name = "MISSION DETAILS"

    mission: MissionRecord
    slot: MissionSlot

    @property
    def name(self) -> str:
        return f"{self.mission.type_label}: {self.mission.name.upper()}"

    def _player_label(self, state: MatchState) -> str | None:
        if self.slot == MissionSlot.ATTACKER_SECONDARY:
            return f"Player {state.attacker_player_number} (ATTACKER)"
        if self.slot == MissionSlot.DEFENDER_SECONDARY:
            return f"Player {state.defender_player_number} (DEFENDER)"
        return None

    def display_guidance(self, state: MatchState) -> str:
        player = self._player_label(state)
        text = self.mission.display_text()
        if player:
            return f"{player}:\n\n{text}"
        return text

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        content: list[ContentNode] = [
            MissionBlock(
                mission_name=self.mission.name,
                player=self._player_label(state),
                scoring_rules=[FormattedText(text=self.mission.full_text)],
            )
        ]
        if self.mission.has_action:
            content.append(
                InfoBox(
                    title="Mission Action",
                    children=[
                        Paragraph(text="This mission has an action. Units can start it in the Shooting phase."),
                    ],
                    variant=BoxVariant.INFO,
                )
            )
        return content

    def next_phase(self, state: MatchState) -> Phase:
        if self.slot == MissionSlot.PRIMARY:
            return self._follow(CreateBattlefield)
        if self.slot == MissionSlot.ATTACKER_SECONDARY:
            return self._follow(SelectDefenderSecondary)
        return self._follow(DeclareBattleFormations)


class CreateBattlefield(SetupPhase):
    display_name = "CREATE THE BATTLEFIELD"

    def display_guidance(self, state: MatchState) -> str:
        return (
            f"Battlefield size for {state.battle_size.label.upper()}: {state.battle_size.battlefield}\n"
            "\n"
            "Set up terrain features and objective markers according to mission rules."
        )

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        return [
            KeyValue(pairs=[
                ("Battle Size", state.battle_size.label),
                ("Battlefield", state.battle_size.battlefield),
            ]),
            Paragraph(text="Set up terrain features and objective markers according to mission rules."),
            InfoBox(
                title="Terrain Guidelines",
                children=[
                    BulletList(items=[
                        "Ruins block line of sight",
                        "Woods: Units wholly within are never fully visible",
                        "Benefit of Cover: +1 to armor saves vs ranged",
                    ])
                ],
                variant=BoxVariant.REMINDER,
            ),
        ]

    def next_phase(self, state: MatchState) -> Phase:
        return self._follow(DetermineAttacker)


class DetermineAttacker(SetupPhase):
    display_name = "DETERMINE ATTACKER & DEFENDER"

    def display_guidance(self, state: MatchState) -> str:
        return "\n".join([
            "Both players roll off (D6).",
            "",
            "  Winner is the Attacker",
            "  Loser is the Defender",
            "",
            "Who won the roll-off?",
            "1. Player 1 is the Attacker",
            "2. Player 2 is the Attacker",
        ])

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        return [
            Paragraph(text="Both players roll off (D6)."),
            KeyValue(pairs=[
                ("Winner", "becomes the Attacker"),
                ("Loser", "becomes the Defender"),
            ]),
        ]

    def requires_input(self) -> bool:
        return True

    def choices(self, state: MatchState) -> list[tuple[str, str]]:
        return _roll_off_choices("is the Attacker")

    def process_input(self, raw_input: str, state: MatchState) -> Phase | None:
        choice = parse_choice(raw_input, 2)
        if choice is None:
            return None
        state.attacker_player_number = choice
        return self.next_phase(state)

    def next_phase(self, state: MatchState) -> Phase:
        return self._follow(SelectAttackerSecondary)


class _SelectSecondary(SetupPhase):
    """Shared behaviour for the attacker and defender secondary mission draws"""

    role: ClassVar[str] = "Attacker"

    @abstractmethod
    def _player_number(self, state: MatchState) -> int:
        """Player drawing this secondary"""

    @abstractmethod
    def _assign(self, state: MatchState, mission: MissionRecord) -> None:
        """Record the drawn mission on the match"""

    @abstractmethod
    def _details_slot(self) -> MissionSlot:
        """Slot the following MissionDetails phase shows"""

    def display_guidance(self, state: MatchState) -> str:
        header = f"{self.role} (Player {self._player_number(state)}):"
        missions = self.catalog.secondary_missions
        if not missions:
            return f"{header}\n\nNo secondary missions are available.\nCheck the mission files and restart the guide."
        lines = [header, "", "Select your secondary mission:", ""]
        lines.extend(_mission_menu(missions))
        return "\n".join(lines)

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        missions = self.catalog.secondary_missions
        header = Paragraph(text=f"{self.role} (Player {self._player_number(state)}): select your secondary mission.")
        if not missions:
            return [header, _no_missions_box("secondary")]
        return [header, NumberedList(items=[_mission_label(mission) for mission in missions])]

    def requires_input(self) -> bool:
        return True

    def choices(self, state: MatchState) -> list[tuple[str, str]]:
        return [
            (str(index), label)
            for index, label in enumerate(_mission_menu(self.catalog.secondary_missions), start=1)
        ]

    def process_input(self, raw_input: str, state: MatchState) -> Phase | None:
        missions = self.catalog.secondary_missions
        choice = parse_choice(raw_input, len(missions))
        if choice is None:
            return None
        mission = missions[choice - 1]
        self._assign(state, mission)
        return self._follow(MissionDetails, mission=mission, slot=self._details_slot())

    def next_phase(self, state: MatchState) -> Phase:
        return self


class SelectAttackerSecondary(_SelectSecondary):
    display_name = "ATTACKER SECONDARY MISSION"

    role = "Attacker"

    def _player_number(self, state: MatchState) -> int:
        return state.attacker_player_number

    def _assign(self, state: MatchState, mission: MissionRecord) -> None:
        state.attacker_secondary_mission = mission

    def _details_slot(self) -> MissionSlot:
        return MissionSlot.ATTACKER_SECONDARY


class SelectDefenderSecondary(_SelectSecondary):
    display_name = "DEFENDER SECONDARY MISSION"

    role = "Defender"

    def _player_number(self, state: MatchState) -> int:
        return state.defender_player_number

    def _assign(self, state: MatchState, mission: MissionRecord) -> None:
        state.defender_secondary_mission = mission

    def _details_slot(self) -> MissionSlot:
        return MissionSlot.DEFENDER_SECONDARY


class DeclareBattleFormations(SetupPhase):
    display_name = "DECLARE BATTLE FORMATIONS"

    def display_guidance(self, state: MatchState) -> str:
        return "\n".join([
            "Both players now secretly note down:",
            "",
            "1. ATTACHED LEADERS",
            "   Which Leader units will start attached to which Bodyguard units",
            "",
            "2. EMBARKED UNITS",
            "   Which units will start embarked within Transport models",
            "",
            "3. RESERVES",
            "   Which units will start in Reserves (including Strategic Reserves)",
            "   - Strategic Reserves: Max 25% of army points",
            "   - Deep Strike units can be set up in Reserves",
            "",
            "When both players are ready, declare your selections to your opponent.",
        ])

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        return [
            Paragraph(text="Both players now secretly note down:"),
            NumberedList(items=[
                "Attached Leaders - Which Leader units will start attached to which Bodyguard units",
                "Embarked Units - Which units will start embarked within Transport models",
                "Reserves - Which units will start in Reserves (arrive from Round 2)",
            ]),
            InfoBox(
                title="Reserves Quick Reference",
                children=[
                    BulletList(items=[
                        "Strategic Reserves: Max 25% of army points",
                        "Deep Strike units can also be placed in Reserves",
                        "All reserves arrive from Round 2 onwards",
                    ])
                ],
                variant=BoxVariant.INFO,
            ),
            Paragraph(text="When both players are ready, declare your selections to your opponent."),
        ]

    def next_phase(self, state: MatchState) -> Phase:
        return self._follow(DeployArmies)


class DeployArmies(SetupPhase):
    display_name = "DEPLOY ARMIES"

    def display_guidance(self, state: MatchState) -> str:
        return "\n".join([
            "Players alternate deploying units, one at a time.",
            "",
            "Deployment order:",
            f"  1. Player {state.attacker_player_number} (ATTACKER) deploys first",
            f"  2. Player {state.defender_player_number} (DEFENDER) deploys next",
            "  3. Continue alternating...",
            "",
            "Deployment rules:",
            "  Models must be set up wholly within their deployment zone",
            "  Continue until all units are deployed (or no room remains)",
            "",
            "Infiltrators:",
            "  After all other units deployed, roll off",
            "  Winner alternates setting up Infiltrators units",
            '  Infiltrators: Set up anywhere 9"+ from enemy deployment zone and models',
        ])

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        return [
            Paragraph(text="Players alternate deploying units, one at a time."),
            NumberedList(items=[
                f"Player {state.attacker_player_number} (Attacker) deploys first",
                f"Player {state.defender_player_number} (Defender) deploys next",
                "Continue alternating until all units are deployed",
            ]),
            InfoBox(
                title="Deployment Rules",
                children=[
                    BulletList(items=[
                        "Models must be set up wholly within their deployment zone",
                        "Continue until all units are deployed (or no room remains)",
                    ])
                ],
                variant=BoxVariant.REMINDER,
            ),
            InfoBox(
                title="Infiltrators",
                children=[
                    Paragraph(text="After all other units deployed:"),
                    BulletList(items=[
                        "Roll off - winner alternates setting up Infiltrators",
                        'Set up anywhere 9"+ from enemy deployment zone and models',
                    ]),
                ],
                variant=BoxVariant.INFO,
            ),
        ]

    def next_phase(self, state: MatchState) -> Phase:
        return self._follow(PreBattleRules)


class PreBattleRules(SetupPhase):
    display_name = "RESOLVE PRE-BATTLE RULES"

    def display_guidance(self, state: MatchState) -> str:
        return "\n".join([
            "Players alternate resolving any pre-battle rules,",
            "starting with the player who will take the first turn.",
            "",
            "Common pre-battle rules:",
            "",
            'Scouts X":',
            '  Before the first turn, unit can make a Normal move up to X"',
            '  Must end 9"+ from all enemy models',
            "  Dedicated Transports with only Scouts-equipped models can also Scout",
            "",
            "Note: If both players have Scouts units, the player going first moves theirs first.",
        ])

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        return [
            Paragraph(
                text="Players alternate resolving any pre-battle rules, "
                     "starting with the player who will take the first turn."
            ),
            InfoBox(
                title='Scouts X"',
                children=[
                    Paragraph(text='Before the first turn, unit can make a Normal move up to X":'),
                    BulletList(items=[
                        'Must end 9"+ from all enemy models',
                        "Dedicated Transports with only Scouts-equipped models can also Scout",
                    ]),
                ],
                variant=BoxVariant.INFO,
            ),
            InfoBox(
                title="Note",
                children=[
                    Paragraph(text="If both players have Scouts units, the player going first moves theirs first."),
                ],
                variant=BoxVariant.REMINDER,
            ),
        ]

    def next_phase(self, state: MatchState) -> Phase:
        return self._follow(DetermineFirstTurn)


class DetermineFirstTurn(SetupPhase):
    """Last setup step; choosing the first player starts battle round 1"""

    display_name = "DETERMINE FIRST TURN"

    def display_guidance(self, state: MatchState) -> str:
        return "\n".join([
            "Players roll off to determine who takes the first turn.",
            "",
            "Who won the roll-off?",
            "1. Player 1 goes first",
            "2. Player 2 goes first",
        ])

    def display_structured_guidance(self, state: MatchState) -> list[ContentNode]:
        return [Paragraph(text="Players roll off to determine who takes the first turn.")]

    def requires_input(self) -> bool:
        return True

    def choices(self, state: MatchState) -> list[tuple[str, str]]:
        return _roll_off_choices("goes first")

    def process_input(self, raw_input: str, state: MatchState) -> Phase | None:
        choice = parse_choice(raw_input, 2)
        if choice is None:
            return None
        state.first_player_number = choice
        state.start_battle()
        return self.next_phase(state)

    def next_phase(self, state: MatchState) -> Phase:
        return CommandPhase()
