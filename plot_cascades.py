import sys
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

SRC_PATH = Path(__file__).parent / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.append(str(SRC_PATH))

from match3.diagnostics import run_soak  # type: ignore

SWAPS = 3000
PALETTE_SIZES = (4, 5, 6)
PALETTE = ['red', 'green', 'blue', 'yellow', 'magenta', 'cyan']

plt.figure(figsize=(7, 4))
for size in PALETTE_SIZES:
    report = run_soak(8, 8, PALETTE[:size], seed=size, swaps=SWAPS)
    depths = np.array(report.cascade_depths)
    if depths.size == 0:
        continue
    bins = np.arange(1, depths.max() + 2)
    counts, _ = np.histogram(depths, bins=bins)
    plt.plot(bins[:-1], counts / depths.size, marker="o", label=f"{size} types (mean {depths.mean():.2f})")

plt.yscale("log")
plt.xlabel("Cascade depth (destroy iterations per accepted swap)")
plt.ylabel("Fraction of accepted swaps")
plt.title(f"Cascade depth on an 8x8 board, {SWAPS} requests per palette")
plt.legend()
plt.grid(True)
plt.show()
