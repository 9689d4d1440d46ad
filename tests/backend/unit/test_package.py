import os
import subprocess
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[3]


def test_engine_package_imports_without_http_driver() -> None:
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(ROOT_DIR), env.get("PYTHONPATH", "")]))
    command = [
        sys.executable,
        "-c",
        "import sys, longedrome.backend; "
        "print(sorted(name for name in ('longedrome.backend.api', 'fastapi', 'uvicorn') if name in sys.modules))",
    ]

    completed = subprocess.run(command, cwd=str(ROOT_DIR), env=env, capture_output=True, text=True, check=True)

    assert completed.stdout.strip() == "[]"
