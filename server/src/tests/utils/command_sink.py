"""
Recording stand-in for the RCON command service.
"""

from typing import List, Tuple


class RecordingCommandSink:
    """Captures issued commands in order instead of sending them."""

    def __init__(self):
        self.commands: List[Tuple] = []

    def disband_squad(self, team_id: int, squad_id: int) -> None:
        self.commands.append(("disband", team_id, squad_id))

    def warn(self, player_id: str, message: str) -> None:
        self.commands.append(("warn", player_id, message))

    def broadcast(self, message: str) -> None:
        self.commands.append(("broadcast", message))

    def kick(self, player_id: str, reason: str) -> None:
        self.commands.append(("kick", player_id, reason))

    def of_type(self, kind: str) -> List[Tuple]:
        return [command for command in self.commands if command[0] == kind]

    @property
    def disbands(self) -> List[Tuple]:
        return self.of_type("disband")

    @property
    def warnings(self) -> List[str]:
        return [command[2] for command in self.of_type("warn")]

    @property
    def broadcasts(self) -> List[str]:
        return [command[1] for command in self.of_type("broadcast")]

    @property
    def kicks(self) -> List[Tuple]:
        return self.of_type("kick")

    def clear(self) -> None:
        self.commands.clear()
