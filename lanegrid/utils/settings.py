from PySide6.QtCore import QSettings, Signal

# Defaults for settings that are accessed from multiple places.
DEFAULT_SETTINGS = {
    'lane_count': 3,
    'orientation': 'vertical',  # vertical or horizontal
    # Hide DEBUG flow logs; set LANEGRID_TRACE=1 to override per process.
    'minimal_trace_logs': True,
}


class Settings(QSettings):
    # Signal that shows that the setting with the given string was changed
    change = Signal(str, object, name='settingsChanged')

    def __init__(self):
        super().__init__('lanegrid', 'lanegrid')

    def setValue(self, key, value):
        super().setValue(key, value)
        self.change.emit(key, value)

# Common shared instance to ensure the Signal is also shared
settings = Settings()


def get_lane_count() -> int:
    return int(settings.value(
        'lane_count', defaultValue=DEFAULT_SETTINGS['lane_count'], type=int))


def get_orientation() -> str:
    orientation = settings.value(
        'orientation', defaultValue=DEFAULT_SETTINGS['orientation'],
        type=str)
    return str(orientation or DEFAULT_SETTINGS['orientation']).strip().lower()
