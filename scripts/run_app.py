#!/usr/bin/env python
"""
Run the Streamlit rule tester.

Usage:
    python scripts/run_app.py

PRICE_GUIDE_* environment variables are passed through to the app; the log
level also sets Streamlit's own logger.
"""
import os
import subprocess
import sys
from pathlib import Path


def main():
    project_root = Path(__file__).parent.parent
    src_path = project_root / 'src'
    ui_path = src_path / 'price_guide' / 'ui' / 'app_streamlit.py'

    if not ui_path.exists():
        print(f"ERROR: UI module not found at {ui_path}")
        sys.exit(1)

    sys.path.insert(0, str(src_path))
    from price_guide.config.settings import get_settings
    settings = get_settings()

    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(src_path), env.get("PYTHONPATH")]))

    cmd = [
        sys.executable, '-m', 'streamlit', 'run', str(ui_path),
        '--logger.level', settings.log_level.lower(),
    ]
    print(f"Starting Price Guide rule tester (default currency {settings.default_currency})")
    print(f"  {' '.join(cmd)}")

    try:
        subprocess.run(cmd, cwd=str(project_root), env=env)
    except KeyboardInterrupt:
        print("\nRule tester stopped.")


if __name__ == "__main__":
    main()
