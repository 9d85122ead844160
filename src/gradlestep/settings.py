from __future__ import annotations
import os

INSTALLATIONS_FILE = os.environ.get("GRADLESTEP_INSTALLATIONS", ".gradlestep/installations.json")
NODE_NAME = os.environ.get("GRADLESTEP_NODE_NAME", "built-in")
