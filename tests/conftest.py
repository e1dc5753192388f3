import os
import sys

import matplotlib

matplotlib.use("Agg")

# make the examples/ directory importable when running `pytest tests`
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
