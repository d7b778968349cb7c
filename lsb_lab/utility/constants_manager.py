from dotenv import load_dotenv, find_dotenv
import os

from typing import Optional


class ConstantsManager:
    _dotenv_loaded = False

    def __init__(self):
        if not ConstantsManager._dotenv_loaded:
            load_dotenv(dotenv_path=find_dotenv(usecwd=True), override=False)
            ConstantsManager._dotenv_loaded = True

    def get_variable(self, variableName, default: Optional[str] = None):
        variable = os.environ.get(variableName, "")
        if variable == "":
            if default is not None:
                return default
            raise Exception(f"Could not find {variableName} environment variable")
        return variable

    def get_optional_int(self, variableName) -> Optional[int]:
        variable = os.environ.get(variableName, "")
        if variable == "":
            return None
        try:
            return int(variable)
        except ValueError as exc:
            raise Exception(f"{variableName} must be an integer, got {variable!r}") from exc

    def get_output_dir(self):
        return self.get_variable('LSB_OUTPUT_DIR', 'stego')

    def get_recovered_dir(self):
        return self.get_variable('LSB_RECOVERED_DIR', 'stego_recovered')

    def get_max_cover_pixels(self):
        return self.get_optional_int('LSB_MAX_COVER_PIXELS')

    def get_max_payload_bytes(self):
        return self.get_optional_int('LSB_MAX_PAYLOAD_BYTES')

    def get_log_level(self, default: str = 'INFO'):
        return self.get_variable('LSB_LOG_LEVEL', default).upper()
