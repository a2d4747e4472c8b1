"""Command pattern implementation for prompt key handling."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .prompt import Prompt
    from .keyboard import KeyEvent


class PromptCommand(ABC):
    """Base class for prompt commands."""

    @abstractmethod
    def execute(self, prompt: 'Prompt', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            prompt: Prompt instance
            key_event: The key event that triggered this command

        Returns:
            True if the event was handled
        """
        pass


class InsertTabCommand(PromptCommand):
    def execute(self, prompt, key_event):
        prompt.insert_tab()
        return True


class InsertNewlineCommand(PromptCommand):
    def execute(self, prompt, key_event):
        prompt.insert_newline()
        return True


class EraseCommand(PromptCommand):
    def execute(self, prompt, key_event):
        prompt.erase_previous_char()
        return True


class LeftCharCommand(PromptCommand):
    def execute(self, prompt, key_event):
        prompt.move_cursor_left()
        return True


class RightCharCommand(PromptCommand):
    def execute(self, prompt, key_event):
        prompt.move_cursor_right()
        return True


class IgnoreCommand(PromptCommand):
    """Leaves the key to the caller (history navigation)."""

    def execute(self, prompt, key_event):
        return False


class InsertCharCommand(PromptCommand):
    """Inserts the key's character unless a modifier is held."""

    def execute(self, prompt, key_event):
        if key_event.has_modifier or len(key_event.value) != 1:
            return False
        prompt.insert_char(key_event.value)
        return True


class CommandRegistry:
    """Explicit dispatch table from key classification to command."""

    def __init__(self):
        self._commands: Dict[KeyType, PromptCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        self.register(KeyType.TAB, InsertTabCommand())
        self.register(KeyType.ENTER, InsertNewlineCommand())
        self.register(KeyType.BACKSPACE, EraseCommand())
        # Up/down are reserved for history, owned by the caller
        self.register(KeyType.UP, IgnoreCommand())
        self.register(KeyType.DOWN, IgnoreCommand())
        self.register(KeyType.LEFT, LeftCharCommand())
        self.register(KeyType.RIGHT, RightCharCommand())
        self.register(KeyType.REGULAR, InsertCharCommand())
        self.register(KeyType.OTHER, IgnoreCommand())

    def register(self, key_type: KeyType, command: PromptCommand):
        """Register (or replace) the command for a key classification."""
        self._commands[key_type] = command

    def get_command(self, key_event: 'KeyEvent') -> Optional[PromptCommand]:
        return self._commands.get(key_event.key_type)

    def execute(self, prompt: 'Prompt', key_event: 'KeyEvent') -> bool:
        """Dispatch a key event.

        Returns:
            True if a command handled the event
        """
        command = self.get_command(key_event)
        if command is None:
            return False
        return command.execute(prompt, key_event)
