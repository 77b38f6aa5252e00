import os
from PySide6.QtCore import QSettings


class SettingsManager:
    """
    Handles persistent application settings using QSettings.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(SettingsManager, cls).__new__(cls)
            cls._instance._settings = QSettings("PlayOrder", "PlayOrder")
        return cls._instance

    @property
    def extension(self) -> str:
        return self._settings.value("files/extension", ".mp3")

    @extension.setter
    def extension(self, value: str):
        self._settings.setValue("files/extension", value)

    @property
    def mirror_root(self) -> str:
        default = os.path.join(os.path.expanduser("~"), "Music")
        return self._settings.value("mirror/root", default)

    @mirror_root.setter
    def mirror_root(self, value: str):
        self._settings.setValue("mirror/root", value)

    @property
    def last_folder(self) -> str:
        return self._settings.value("source/last_folder", "")

    @last_folder.setter
    def last_folder(self, value: str):
        self._settings.setValue("source/last_folder", value)

    @property
    def source_mode(self) -> str:
        # "device" or "folder"
        return self._settings.value("source/mode", "device")

    @source_mode.setter
    def source_mode(self, value: str):
        self._settings.setValue("source/mode", value)

    @property
    def debug(self) -> bool:
        val = self._settings.value("app/debug", False)
        # QSettings hands booleans back as strings from ini files
        if isinstance(val, str):
            return val.lower() in ("true", "1")
        return bool(val)

    @debug.setter
    def debug(self, value: bool):
        self._settings.setValue("app/debug", bool(value))
