"""
Exceptions for game-setup errors.
"""


class GameSetupError(Exception):
    """Raised when a game cannot be set up from the given configuration."""

    def __init__(self, total_players: int, roles: int, message: str = ""):
        self.total_players = total_players
        self.roles = roles
        self.message = message or (
            f"Role distribution has {roles} roles but the table seats {total_players} players"
        )
        super().__init__(self.message)
