"""Production startup - runs the API server with uvicorn."""
import sys
from pathlib import Path

# Modules under src/ import each other as top-level packages
src_dir = Path(__file__).parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

import uvicorn

from api.server import app, config

print(f"[start.py] Starting on port {config['port']}", flush=True)
uvicorn.run(app, host=config["host"], port=config["port"], log_level="info")
