"""Shared OTel metrics instruments for the API client."""

from opentelemetry import metrics

METER_NAME = "blog_api_client"

meter = metrics.get_meter(METER_NAME)

api_requests_total = meter.create_counter(
    name="api_requests_total",
    description="Responses received from the blog API",
    unit="1",
)

api_request_errors_total = meter.create_counter(
    name="api_request_errors_total",
    description="Failed API calls, by kind (transport or http)",
    unit="1",
)

auth_redirects_total = meter.create_counter(
    name="auth_redirects_total",
    description="Redirects to the login view after a 401 response",
    unit="1",
)
