#!/usr/bin/env python3
"""Direct launcher for the Expense Tracker.

Starts Streamlit on expense_tracker/Home.py from the project root.
"""

import sys
import subprocess
from pathlib import Path

project_root = Path(__file__).parent.resolve()
app_path = project_root / "expense_tracker" / "Home.py"

if __name__ == "__main__":
    sys.exit(subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        str(app_path),
    ], cwd=project_root).returncode)
