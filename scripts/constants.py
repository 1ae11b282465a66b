"""Constants for the project."""

from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent

# ============================================================================
# Data directories
# ============================================================================
DATA_FOLDER = PROJECT_ROOT / "data"
CORPUS_PATH = DATA_FOLDER / "pairs.txt"
CONFIG_YAML = DATA_FOLDER / "autoalign.yaml"

# ============================================================================
# Results directories
# ============================================================================
RESULTS_FOLDER = PROJECT_ROOT / "results"

# Alignments (from run_autoalign.py)
MACHINE_OUTPUT = RESULTS_FOLDER / "alignments.csv"
HUMAN_OUTPUT = RESULTS_FOLDER / "alignments.txt"

# Average cost per refinement iteration (from run_autoalign.py)
TRACE_CSV = RESULTS_FOLDER / "convergence.csv"

# Convergence plot (from plot_convergence.py)
FIGURES_FOLDER = RESULTS_FOLDER / "figures"

# ============================================================================
# Plot styling
# ============================================================================
COST_COLORS = {
    "average_cost": "#2E86AB",
    "max_cost": "#A23B72",
    "selected": "#0c6e17",
}
PLOT_DPI = 300
PLOT_GRID_ALPHA = 0.3
PLOT_XLABEL_FONTSIZE = 12
PLOT_YLABEL_FONTSIZE = 12
PLOT_TITLE_FONTSIZE = 14
