from PySide6.QtWidgets import (QDialog, QVBoxLayout, QHBoxLayout, QLineEdit, QCheckBox,
                               QPushButton, QGroupBox, QFormLayout, QFileDialog)


class SettingsDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        from ..core.settings_manager import SettingsManager
        self.settings = SettingsManager()

        self.setWindowTitle("Settings")
        self.setMinimumWidth(400)

        layout = QVBoxLayout(self)

        # Files Group
        files_group = QGroupBox("Files")
        files_layout = QFormLayout(files_group)

        self.ext_input = QLineEdit(self.settings.extension)
        self.ext_input.setPlaceholderText(".mp3")
        files_layout.addRow("Extension:", self.ext_input)

        layout.addWidget(files_group)

        # Mirror Group
        mirror_group = QGroupBox("Backup")
        mirror_layout = QFormLayout(mirror_group)

        self.mirror_input = QLineEdit(self.settings.mirror_root)
        mirror_btn = QPushButton("Browse...")
        mirror_btn.clicked.connect(self._on_browse_mirror)

        mirror_row = QHBoxLayout()
        mirror_row.addWidget(self.mirror_input)
        mirror_row.addWidget(mirror_btn)
        mirror_layout.addRow("Backup Root:", mirror_row)

        layout.addWidget(mirror_group)

        self.debug_check = QCheckBox("Verbose logging")
        self.debug_check.setChecked(self.settings.debug)
        layout.addWidget(self.debug_check)

        layout.addStretch()

        # Buttons
        btns = QHBoxLayout()
        ok_btn = QPushButton("Save")
        ok_btn.clicked.connect(self._on_save)
        cancel_btn = QPushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)

        btns.addStretch()
        btns.addWidget(ok_btn)
        btns.addWidget(cancel_btn)
        layout.addLayout(btns)

    def _on_browse_mirror(self):
        directory = QFileDialog.getExistingDirectory(self, "Select Backup Root", self.mirror_input.text())
        if directory:
            self.mirror_input.setText(directory)

    def _on_save(self):
        ext = self.ext_input.text().strip() or ".mp3"
        if not ext.startswith("."):
            ext = "." + ext
        self.settings.extension = ext
        self.settings.mirror_root = self.mirror_input.text()
        self.settings.debug = self.debug_check.isChecked()
        self.accept()
