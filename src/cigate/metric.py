import re

from prometheus_client import Counter

request_counter = Counter(
    "cigate_num_req", "Total number of requests", labelnames=["path"]
)
webhook_counter = Counter(
    "cigate_num_webhook", "Total number of webhooks", labelnames=["event"]
)
webhook_skipped_counter = Counter(
    "cigate_num_webhook_skipped",
    "Total number of skipped webhooks",
    labelnames=["event", "reason"],
)

action_counter = Counter(
    "cigate_num_actions",
    "Number of trigger actions handled by the executor",
    labelnames=["kind", "result"],
)

error_counter = Counter(
    "cigate_error_counter", "Total number of errors", labelnames=["context"]
)

api_call_count = Counter(
    "cigate_num_api_calls",
    "Total number of GitHub API calls",
    labelnames=["endpoint"],
)

_ISSUE_ENDPOINT = re.compile(r"/issues/\d+/(labels|comments)")


def _normalize_api_endpoint(url: str) -> str:
    if url == "installation_token" or "access_tokens" in url:
        return "installation_token"
    if m := _ISSUE_ENDPOINT.search(url):
        return m.group(1)
    return "other"


def record_api_call(endpoint: str) -> None:
    api_call_count.labels(endpoint=_normalize_api_endpoint(endpoint)).inc()
