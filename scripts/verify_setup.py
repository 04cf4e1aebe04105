"""Verify that the setup is correct before running the topic summary.

Run after `pip install -e .` so that topic_stars is importable.
"""
import os
import sys
import time
from pathlib import Path
from topic_stars.application.cache_gate import CacheGate
from topic_stars.config import load_settings
from topic_stars.domain.cache_store_interface import CacheSlot
from topic_stars.domain.errors import ConfigError
from topic_stars.infrastructure.file_store import FileCacheStore


def check_configuration(settings):
    """Print the loaded settings."""
    print("Checking configuration...")

    print("✅ Configuration loaded")
    print(f"   Topic: {settings.query.name} (top {settings.query.repo_count})")
    print(f"   Cache TTL: {settings.ttl_minutes} minutes")
    print(f"   Data file: {settings.data_file}")
    print(f"   Timestamp file: {settings.timestamp_file}")
    print(f"   Request log: {settings.log_file}")
    return True


def check_github_token(settings):
    """Verify GitHub token is present."""
    print("\nChecking GitHub token...")

    token = settings.access_token
    if not token:
        print("⚠️  PERSONAL_ACCESS_TOKEN not set (only cached data can be shown)")
        return True  # Fresh cached data needs no token

    # Simple check - token format
    if token.startswith("ghp_") or token.startswith("github_pat_"):
        print("✅ GitHub token format looks valid")
        print(f"   Token prefix: {token[:10]}...")
        return True
    else:
        print("⚠️  Token format may be invalid (expected ghp_* or github_pat_*)")
        return True  # Don't fail, might be old format


def check_writable_directories(settings):
    """Check that cache and log directories can be written."""
    print("\nChecking directories...")
    ok = True
    for path in {settings.data_file, settings.timestamp_file, settings.log_file}:
        directory = Path(path).parent
        existing = directory
        while not existing.exists() and existing != existing.parent:
            existing = existing.parent
        if os.access(existing, os.W_OK):
            print(f"✅ {directory} is writable")
        else:
            print(f"❌ {directory} is not writable")
            ok = False
    return ok


def check_cache_status(settings):
    """Report whether the cache is missing, fresh or expired."""
    print("\nChecking cache...")
    store = FileCacheStore(settings.data_file, settings.timestamp_file)
    sizes = store.status()
    timestamp_raw = store.read(CacheSlot.TIMESTAMP)
    written_at = CacheGate.parse_timestamp(timestamp_raw)
    now = int(time.time() * 1000)

    if sizes[CacheSlot.DATA.value] is None:
        print("⚠️  No cached data yet. The next run will query GitHub.")
        return True

    print(f"   Cached data: {sizes[CacheSlot.DATA.value]} bytes")
    if written_at is None:
        print("⚠️  Cache timestamp missing or corrupt. The next run will query GitHub.")
    elif CacheGate.is_expired(timestamp_raw, now, settings.ttl_millis):
        print(f"⚠️  Cache expired ({(now - written_at) // 60000} minutes old)")
    else:
        print(f"✅ Cache is fresh ({(now - written_at) // 60000} minutes old)")
    return True


def main():
    """Run all verification checks."""
    print("=" * 60)
    print("Topic Stars - Setup Verification")
    print("=" * 60)

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"❌ Invalid configuration: {e}")
        print("\nFix numeric settings such as CACHE_TTL_MINUTES and run again.")
        sys.exit(1)

    checks = [
        ("Configuration", check_configuration),
        ("GitHub Token", check_github_token),
        ("Directories", check_writable_directories),
        ("Cache", check_cache_status),
    ]

    results = {}
    for name, check_func in checks:
        try:
            results[name] = check_func(settings)
        except Exception as e:
            print(f"❌ {name} check failed with exception: {e}")
            results[name] = False

    print("\n" + "=" * 60)
    print("Verification Summary")
    print("=" * 60)

    for name, passed in results.items():
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"{status}: {name}")

    all_passed = all(results.values())

    if all_passed:
        print("\n✅ All checks passed! Ready to run.")
        print("\nNext steps:")
        print("  pip install -e .   (once, so topic_stars is importable)")
        print("  python show_topic.py")
        sys.exit(0)
    else:
        print("\n❌ Some checks failed. Please fix the issues above.")
        print("\nCommon solutions:")
        print("  - Install the package: pip install -e .")
        print("  - Make the cache and log directories writable")
        sys.exit(1)


if __name__ == "__main__":
    main()
