import json
import os
from typing import TYPE_CHECKING

from particles.starField import StarField, InvalidConfigError
import core.console as console
if TYPE_CHECKING:
    from main import WarpSpeed

CONFIG_DIR = "configs"

CONFIG_VARS = [
    "STARS_PER_SECOND",
    "DISTANCE_PER_SECOND",
    "FRAMERATE",
    "MIN_DISTANCE",
    "MAX_DISTANCE",
    "RES",
    "STAR_COLOR",
    "SET_SEED",
    "ACCUMULATE_SPAWNS",
]


def readJson(path):
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidConfigError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigError(f"{path} must hold a JSON object, got {type(data).__name__}")
    return data


class valInit:
    def __init__(self: "WarpSpeed", configDir=CONFIG_DIR):
        self.consoleLog = []
        self.consoleOpen = False

        self.configDir = configDir
        self.mainConfigPath = os.path.join(configDir, "main.json")

        self.STARS_PER_SECOND = 50000
        self.DISTANCE_PER_SECOND = 400
        self.FRAMERATE = 60
        self.MIN_DISTANCE = 100
        self.MAX_DISTANCE = 200
        self.RES = [1280, 720]
        self.STAR_COLOR = [255, 255, 255]
        self.SET_SEED = None
        self.ACCUMULATE_SPAWNS = False

        self.log("Loading config...")
        self.configPath = self.autoloadConfig()
        self.log(f"Using {self.configPath}")

        self.starField = self.makeStarField()
        self.res = self.starField.res

    def log(self, text):
        console.log(self, text)

    def makeStarField(self) -> StarField:
        if not isinstance(self.RES, (list, tuple)) or len(self.RES) != 2:
            raise InvalidConfigError(f"RES must be [width, height], got {self.RES!r}")
        width, height = self.RES

        field = StarField(
            self.STARS_PER_SECOND,
            self.DISTANCE_PER_SECOND,
            self.FRAMERATE,
            self.MIN_DISTANCE,
            self.MAX_DISTANCE,
            width,
            height,
            color=self.STAR_COLOR,
            seed=self.SET_SEED,
            accumulateSpawns=self.ACCUMULATE_SPAWNS,
        )
        self.log(f"Star field created, {field.starsPerFrame:.2f} stars per frame")
        return field

    def configValues(self):
        return {k: getattr(self, k) for k in CONFIG_VARS}

    def saveConfig(self, path):
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.configValues(), f, indent=2)
        self.log(f"Config {path} saved")

    def loadConfig(self, path):
        data = readJson(path)

        unknown = sorted(set(data) - set(CONFIG_VARS))
        for k in unknown:
            self.log(f"Unknown config key {k} ignored")

        for k in CONFIG_VARS:
            if k in data:
                setattr(self, k, data[k])

        self.log(f"Config {path} loaded, {len(data) - len(unknown)} values")

    def saveMainConfig(self, autoload_path):
        os.makedirs(self.configDir, exist_ok=True)
        with open(self.mainConfigPath, "w") as f:
            json.dump({"autoload": autoload_path}, f, indent=2)
        self.log(f"Config {autoload_path} set to load on startup")

    def autoloadConfig(self):
        """Load the config main.json points at and return its path.

        A missing main.json is pointed at a fresh "default" file, a missing
        target is written from the current values. A loaded file is written
        back so keys it lacked show up with their defaults.
        """
        os.makedirs(self.configDir, exist_ok=True)

        path = None
        if os.path.exists(self.mainConfigPath):
            path = readJson(self.mainConfigPath).get("autoload")

        if not path:
            path = os.path.join(self.configDir, "default")
            self.saveMainConfig(path)

        if os.path.exists(path):
            self.loadConfig(path)
        self.saveConfig(path)
        return path
