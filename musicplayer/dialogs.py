from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label


class AddFolderDialog(ModalScreen):
    """Ask for a file or folder to append to the playlist. Dismisses with the path or None."""

    def __init__(self, current_folder: str | None):
        super().__init__()
        self.current_folder = current_folder or ""

    def compose(self):
        yield Vertical(
            Label("Add file or folder", id="dlg_title"),
            Input(value=self.current_folder, placeholder="/path/to/music", id="dlg_input"),
            Horizontal(
                Button("Cancel", id="cancel"),
                Button("Add", id="ok", variant="primary"),
                id="dlg_buttons",
            ),
            id="dlg_container",
        )

    def on_mount(self):
        self.query_one("#dlg_input", Input).focus()

    def on_button_pressed(self, event: Button.Pressed):
        input_widget = self.query_one("#dlg_input", Input)
        if event.button.id == "ok":
            self.dismiss(input_widget.value.strip() or None)
        else:
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted):
        self.dismiss(event.value.strip() or None)
