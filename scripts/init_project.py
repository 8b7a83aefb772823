#!/usr/bin/env python3
"""
Initialize the fleet operations platform.

This script sets up the project by:
- Checking the Python version
- Loading the .env file
- Validating config/config.yaml and its required sections
- Creating export directories
- Checking that required packages import
"""

import os
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

REQUIRED_SECTIONS = [
    "rates",
    "scoring",
    "profitability",
    "operations",
    "hos",
    "equipment",
]


def check_python_version() -> bool:
    """Verify Python version is 3.10 or higher."""
    if sys.version_info < (3, 10):
        print(f"❌ Python 3.10+ required. Current version: {sys.version}")
        return False
    print(f"✅ Python version: {sys.version_info.major}.{sys.version_info.minor}")
    return True


def check_env_file() -> bool:
    """Load .env if present; it is optional."""
    env_path = Path(".env")
    if not env_path.exists():
        print("⚠️  .env file not found, using defaults")
        print("   Run: cp .env.example .env")
        return True

    load_dotenv(env_path)
    print("✅ .env file loaded")

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        print(f"❌ Invalid LOG_LEVEL: {log_level}")
        return False
    print(f"✅ LOG_LEVEL={log_level}")
    return True


def config_dir() -> Path:
    return Path(os.getenv("FLEETOPS_CONFIG_DIR") or "config")


def check_config_files() -> bool:
    """Validate config.yaml exists, parses and has the required sections."""
    path = config_dir() / "config.yaml"
    if not path.exists():
        print(f"❌ Main configuration not found: {path}")
        return False
    print("✅ Main configuration exists")

    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        print(f"❌ Error parsing config.yaml: {e}")
        return False

    if not config:
        print("❌ config.yaml is empty")
        return False
    print("✅ config.yaml is valid YAML")

    missing = [section for section in REQUIRED_SECTIONS if section not in config]
    if missing:
        print(f"❌ Missing config sections: {', '.join(missing)}")
        return False
    print(f"✅ All {len(REQUIRED_SECTIONS)} required sections present")

    return True


def create_data_directories() -> bool:
    """Create necessary data directories."""
    directories = [
        "data/exports",
        "logs",
    ]

    for directory in directories:
        Path(directory).mkdir(parents=True, exist_ok=True)

    print(f"✅ Created {len(directories)} data directories")
    return True


def test_imports() -> bool:
    """Test that critical packages can be imported."""
    required_packages = [
        "pydantic",
        "pydantic_settings",
        "structlog",
        "yaml",
        "dotenv",
    ]

    missing = []
    for package in required_packages:
        try:
            __import__(package)
        except ImportError:
            missing.append(package)

    if missing:
        print(f"❌ Missing packages: {', '.join(missing)}")
        print("   Run: pip install -e .[test]")
        return False

    print("✅ All required packages installed")
    return True


def display_next_steps():
    """Show user what to do next."""
    print("\n" + "=" * 60)
    print("🎉 Project initialization complete!")
    print("=" * 60)
    print("\nNext steps:")
    print("\n1. Review and customize config/config.yaml for your business")
    print("2. Run the tests:")
    print("   pytest")
    print("\n3. Try the agents:")
    print("   python -m fleetops.agents.recommendation")
    print("   python -m fleetops.agents.costing")
    print("   python -m fleetops.agents.compliance")
    print("\n" + "=" * 60)


def main():
    """Run all initialization checks."""
    print("=" * 60)
    print("Fleet Operations Platform - Initialization")
    print("=" * 60)
    print()

    checks = [
        ("Python version", check_python_version),
        (".env file", check_env_file),
        ("Configuration files", check_config_files),
        ("Data directories", create_data_directories),
        ("Package imports", test_imports),
    ]

    passed = 0
    failed = 0

    for name, check_func in checks:
        print(f"\nChecking {name}...")
        if check_func():
            passed += 1
        else:
            failed += 1

    print("\n" + "=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    if failed == 0:
        display_next_steps()
        return 0
    else:
        print("\n❌ Some checks failed. Please fix the issues above.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
