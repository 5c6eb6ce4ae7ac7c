#!/usr/bin/env python3
"""
System Health Check Script for Smart Farming.

This script verifies that the configuration is valid and that the Gemini API
is reachable with the configured key.

Usage:
    python scripts/doctor.py            # configuration checks only
    python scripts/doctor.py --ping     # also send a one-word prompt to Gemini

Exit codes:
    0: All checks passed
    1: One or more checks failed
"""

import argparse
import os
import sys


# ANSI color codes for terminal output
class Colors:
    GREEN = "\033[92m"  # ✓
    RED = "\033[91m"    # ✗
    YELLOW = "\033[93m" # ⚠
    BLUE = "\033[94m"   # ℹ
    BOLD = "\033[1m"
    RESET = "\033[0m"


def print_success(message: str) -> None:
    """Print a success message with green checkmark."""
    print(f"{Colors.GREEN}✓{Colors.RESET} {message}")


def print_error(message: str) -> None:
    """Print an error message with red cross."""
    print(f"{Colors.RED}✗{Colors.RESET} {message}")


def print_warning(message: str) -> None:
    """Print a warning message with yellow warning sign."""
    print(f"{Colors.YELLOW}⚠{Colors.RESET} {message}")


def print_info(message: str) -> None:
    """Print an info message with blue info sign."""
    print(f"{Colors.BLUE}ℹ{Colors.RESET} {message}")


def check_python_version() -> bool:
    """
    Check if Python version is at least 3.10.

    Returns:
        bool: True if check passes
    """
    version = sys.version_info
    is_valid = (version.major, version.minor) >= (3, 10)

    if is_valid:
        print_success(f"Python version: {version.major}.{version.minor}.{version.micro}")
    else:
        print_error(f"Python version: {version.major}.{version.minor}.{version.micro} (expected >= 3.10)")

    return is_valid


def check_project_structure() -> bool:
    """
    Check if required project directories exist.

    Returns:
        bool: True if all directories exist
    """
    required_dirs = [
        "app",
        "app/api",
        "app/core",
        "app/models",
        "app/parsers",
        "app/services",
        "scripts",
    ]

    all_exist = True
    for dir_path in required_dirs:
        if os.path.isdir(dir_path):
            print_success(f"Directory exists: {dir_path}/")
        else:
            print_error(f"Directory missing: {dir_path}/")
            all_exist = False

    return all_exist


def check_config_file() -> bool:
    """
    Check if .env file exists and .env.example is present.

    Returns:
        bool: True if config is properly set up
    """
    env_exists = os.path.exists(".env")
    env_example_exists = os.path.exists(".env.example")

    if env_exists:
        print_success(".env file exists")
    else:
        print_warning(".env file not found (copy from .env.example)")

    if env_example_exists:
        print_success(".env.example exists")
    else:
        print_error(".env.example missing")

    return env_example_exists


def check_settings() -> bool:
    """
    Check that Settings load and print the parsing policy.

    Returns:
        bool: True if settings are valid
    """
    try:
        from app.core.config import get_settings

        settings = get_settings()
    except Exception as e:
        print_error(f"Invalid settings: {str(e)}")
        return False

    print_success(f"Settings loaded (model: {settings.gemini_model})")
    print_info(f"Synthetic data: {'enabled' if settings.allow_synthetic_data else 'disabled'}")
    print_info(f"Unclassified pest control lines: {settings.pest_unclassified_control_policy}")
    if settings.gemini_timeout is None:
        print_info("Gemini timeout: none")
    else:
        print_info(f"Gemini timeout: {settings.gemini_timeout}s")
    return True


def check_gemini_key() -> bool:
    """
    Check that a Gemini API key is configured.

    Returns:
        bool: True if a key is set
    """
    from app.core.config import get_settings

    key = get_settings().gemini_api_key
    if not key or key.startswith("your-"):
        print_error("Gemini API key not configured (set GEMINI_API_KEY in .env)")
        return False

    print_success(f"Gemini API key configured ({key[:4]}...)")
    return True


def check_gemini_api() -> bool:
    """
    Send a minimal prompt to Gemini.

    Returns:
        bool: True if the API answered
    """
    try:
        from app.services.gemini_client import GeminiError, get_gemini_client

        client = get_gemini_client()
        answer = client.generate_content("Reply with the single word: ok")
    except GeminiError as e:
        print_error(f"Gemini request failed: {str(e)}")
        return False

    print_success(f"Gemini API reachable ({client.model}, {len(answer)} chars answered)")
    return True


def main(argv=None) -> int:
    """
    Run all health checks.

    Returns:
        int: Exit code (0 = success, 1 = failure)
    """
    parser = argparse.ArgumentParser(description="Smart Farming health check")
    parser.add_argument("--ping", action="store_true", help="Send a test prompt to Gemini")
    args = parser.parse_args(argv)

    print(f"\n{Colors.BOLD}🏥 Smart Farming System Health Check{Colors.RESET}\n")
    print(f"{Colors.BLUE}Checking configuration...{Colors.RESET}\n")

    results = []

    # Run all checks
    results.append(("Python Version", check_python_version()))
    results.append(("Project Structure", check_project_structure()))
    results.append(("Config Files", check_config_file()))
    settings_ok = check_settings()
    results.append(("Settings", settings_ok))
    if settings_ok:
        key_ok = check_gemini_key()
        results.append(("Gemini API Key", key_ok))
        if args.ping and key_ok:
            results.append(("Gemini API", check_gemini_api()))

    # Summary
    print(f"\n{Colors.BOLD}{'='*50}{Colors.RESET}")
    passed = sum(1 for _, result in results if result)
    total = len(results)

    if all(result for _, result in results):
        msg = (
            f"{Colors.GREEN}{Colors.BOLD}✓ All systems operational! "
            f"({passed}/{total} checks passed){Colors.RESET}\n"
        )
        print(msg)
        return 0
    else:
        failed = total - passed
        msg = (
            f"{Colors.RED}{Colors.BOLD}✗ System has issues "
            f"({passed}/{total} checks passed, {failed} failed){Colors.RESET}\n"
        )
        print(msg)

        # Print failed checks
        print(f"{Colors.BOLD}Failed checks:{Colors.RESET}")
        for name, result in results:
            if not result:
                print(f"  {Colors.RED}✗{Colors.RESET} {name}")

        print()
        return 1


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
