# verify_env_keys.py
import os
import sys

from dotenv import find_dotenv, load_dotenv

REQUIRED_KEYS = ["BACKEND_API_KEY", "CH_API_KEY", "CHARITY_API_KEY", "GETADDRESS_API_KEY"]
OPTIONAL_KEYS = ["REFERENCE_MARKER", "DEFAULT_JURISDICTION", "RATE_LIMIT", "CACHE_TTL_SECONDS"]


def mask(s: str) -> str:
    if not s:
        return ""
    # show first 2 and last 4 chars, mask the middle
    if len(s) <= 6:
        return "*" * len(s)
    return f"{s[:2]}***{s[-4:]}"


def main() -> int:
    dotenv_path = find_dotenv(usecwd=True) or None
    if dotenv_path:
        load_dotenv(dotenv_path)

    ok = True

    print("== Environment key visibility check ==")
    if dotenv_path:
        print(f"Loaded .env from: {dotenv_path}")
    else:
        print("No .env file auto-detected (that's fine if you export vars in your shell).")

    for k in REQUIRED_KEYS:
        v = os.getenv(k)
        if v:
            print(f"✔ {k}: present  (preview: {mask(v)})")
        else:
            print(f"✖ {k}: MISSING")
            ok = False

    for k in OPTIONAL_KEYS:
        v = os.getenv(k)
        print(f"  {k}: {'set' if v else 'default'}")

    in_venv = sys.prefix != getattr(sys, "base_prefix", sys.prefix)
    print(f"\nPython: {sys.executable}")
    print(f"In venv: {in_venv}")

    if not ok:
        print("\nFix tips:")
        print("  • Ensure a .env exists in the project root OR export the vars in your shell.")
        print(f"  • Key names must match exactly: {', '.join(REQUIRED_KEYS)}")
        print("  • After editing .env, restart the app (or this script) so changes are picked up.")

    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
