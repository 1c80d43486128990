# src/salesdw/utils.py
# type: ignore

import os
import pandas as pd  # type: ignore
import yaml  # type: ignore
from typing import Any, Dict, List


# ============================================================
# 📁 DIRECTORY MANAGEMENT
# ============================================================

# Absolute path to this file
current_file = os.path.abspath(__file__)

# Package directory (src/salesdw/)
package_path = os.path.dirname(current_file)

# Project root = 2 levels above the package (src/salesdw → src → project)
project_root = os.path.dirname(os.path.dirname(package_path))

# --- Project-level paths ---
config_path = os.path.join(project_root, "config")
data_path = os.path.join(project_root, "data")
reports_path = os.path.join(project_root, "reports")

# --- Outputs ---
segment_reports_path = os.path.join(reports_path, "segment")
customer_value_path = os.path.join(segment_reports_path, "customer_value")

default_config_file = os.path.join(config_path, "segmentation.yaml")


# ============================================================
# ⚙️ CONFIG UTILITIES
# ============================================================

def load_config(config_file: str = None) -> dict:
    """
    Load the main YAML config from the config/ directory.

    Returns an empty dict when the file is missing or unreadable so that
    callers can fall back to their built-in defaults.
    """
    final_path = config_file or default_config_file

    try:
        with open(final_path, "r") as file:
            return yaml.safe_load(file) or {}
    except (OSError, yaml.YAMLError) as e:
        print(f"❌ Failed to load config '{final_path}': {e}")
        return {}


def load_yaml(path: str) -> Dict[str, Any]:
    """General YAML loader with validation."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"❌ YAML file not found: {path}")

    try:
        with open(path, "r") as f:
            config = yaml.safe_load(f)

        if config is None:
            raise ValueError(f"❌ YAML file empty: {path}")

        print(f"✅ Loaded YAML: {path}")
        return config

    except yaml.YAMLError as e:
        raise ValueError(f"❌ Invalid YAML in {path}: {e}")


# ============================================================
# 🧮 DATAFRAME UTILITIES
# ============================================================

def to_datetime(df: pd.DataFrame, cols: List[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            df[col] = pd.to_datetime(df[col], errors="coerce")
    return df


def require_columns(df: pd.DataFrame, columns: List[str], name: str = "DataFrame") -> None:
    """Raise if any of ``columns`` is missing from ``df``."""
    missing_cols = [col for col in columns if col not in df.columns]
    if missing_cols:
        raise ValueError(f"{name} is missing required columns: {missing_cols}")


def restore_column_case(df: pd.DataFrame, columns: List[str]) -> pd.DataFrame:
    """Rename columns that match ``columns`` ignoring case to their expected spelling."""
    expected = {col.lower(): col for col in columns}
    renames = {
        col: expected[col.lower()]
        for col in df.columns
        if isinstance(col, str) and col.lower() in expected and col != expected[col.lower()]
    }
    return df.rename(columns=renames) if renames else df


# ============================================================
# 🔍 PATH RESOLVER
# ============================================================

def get_path(path_type: str) -> str:
    """
    Convenient path resolver with automatic directory creation.

    Returns any project directory path based on a keyword.
    """

    paths = {
        # Project root structure
        "project": project_root,
        "config": config_path,
        "data": data_path,

        # Reports
        "reports": reports_path,
        "segment_reports": segment_reports_path,
        "customer_value": customer_value_path,
    }

    if path_type not in paths:
        raise ValueError(
            f"❌ Unknown path type '{path_type}'. Allowed values: {list(paths.keys())}"
        )

    resolved = os.path.abspath(paths[path_type])
    os.makedirs(resolved, exist_ok=True)
    return resolved
