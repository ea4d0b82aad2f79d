import os
import dotenv
import logging

dotenv.load_dotenv()

GITHUB_WEBHOOK_SECRET = os.environ.get("GITHUB_WEBHOOK_SECRET")
GITHUB_PRIVATE_KEY = os.environ.get("GITHUB_PRIVATE_KEY")
GITHUB_APP_ID = os.environ.get("GITHUB_APP_ID")
if GITHUB_APP_ID is not None:
    GITHUB_APP_ID = int(GITHUB_APP_ID)

# used by `cigate handle`, e.g. from a workflow step
GITHUB_TOKEN = os.environ.get("GITHUB_TOKEN")

OVERRIDE_LOGGING = logging.getLevelName(os.environ.get("OVERRIDE_LOGGING", "WARNING"))

REPO_ALLOWLIST = os.environ.get("REPO_ALLOWLIST")
if REPO_ALLOWLIST is not None:
    REPO_ALLOWLIST = REPO_ALLOWLIST.split(",")


TELEGRAM_TOKEN = os.environ.get("TELEGRAM_TOKEN")
TELEGRAM_CHAT_ID = os.environ.get("TELEGRAM_CHAT_ID")

ACCESS_TOKEN_TTL = float(os.environ.get("ACCESS_TOKEN_TTL", 300))

DRY_RUN = os.environ.get("DRY_RUN", "false") == "true"

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", 8080))

APPROVED_LABEL = os.environ.get("APPROVED_LABEL", "approved")

CI_BOT = os.environ.get("CI_BOT", "@slab-ci")

FAST_TEST_TARGET = os.environ.get("FAST_TEST_TARGET", "cpu_fast_test")

FULL_TEST_TARGETS = os.environ.get(
    "FULL_TEST_TARGETS",
    "cpu_test,cpu_integer_test,cpu_multi_bit_test,"
    "cpu_wasm_test,csprng_randomness_testing",
).split(",")
