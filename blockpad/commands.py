"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from . import editing, navigation
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands.

    Plain movement drops the selection; Shift-modified movement keeps the
    anchor and extends the selection to the new cursor.
    """

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        extend = key_event.is_shift or key_event.key_type == KeyType.SHIFT_SPECIAL
        self._move(editor, extend)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor', extend: bool):
        """Perform the movement."""
        pass


class LeftCharCommand(MovementCommand):
    def _move(self, editor, extend):
        navigation.move_left(editor.session, extend)


class RightCharCommand(MovementCommand):
    def _move(self, editor, extend):
        navigation.move_right(editor.session, extend)


class UpLineCommand(MovementCommand):
    def _move(self, editor, extend):
        navigation.move_up(editor.session, extend)


class DownLineCommand(MovementCommand):
    def _move(self, editor, extend):
        navigation.move_down(editor.session, extend)


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Editing commands modify the document."""
        before = editor.session.document.texts()
        self._edit(editor, key_event)
        return editor.session.document.texts() != before

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editing.backspace(editor.session)


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        editing.delete_forward(editor.session)


class SplitBlockCommand(EditCommand):
    def _edit(self, editor, key_event):
        editing.split_block(editor.session)


class SoftBreakCommand(EditCommand):
    def _edit(self, editor, key_event):
        editing.insert_soft_break(editor.session)


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        editing.insert_char(editor.session, key_event.value)


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands, with and without Shift
        for key_type in (KeyType.SPECIAL, KeyType.SHIFT_SPECIAL):
            self.register((key_type, 'left'), LeftCharCommand())
            self.register((key_type, 'right'), RightCharCommand())
            self.register((key_type, 'up'), UpLineCommand())
            self.register((key_type, 'down'), DownLineCommand())

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())
        self.register((KeyType.SPECIAL, 'enter'), SplitBlockCommand())
        self.register((KeyType.SHIFT_SPECIAL, 'enter'), SoftBreakCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        command = self._commands.get((key_type, value))
        # Shift has no meaning for backspace/delete
        if command is None and key_type == KeyType.SHIFT_SPECIAL:
            command = self._commands.get((KeyType.SPECIAL, value))
        return command

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)

        return False
