"""Response helpers and base classes for consistent API envelopes."""

from typing import Any

from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import ModelViewSet


def api_response(data: Any, status: int = 200) -> Response:
    """Return data wrapped in the standard ``{ "data": ..., "errors": [] }`` envelope."""

    return Response({"data": data, "errors": []}, status=status)


def _is_enveloped(payload: Any) -> bool:
    return isinstance(payload, dict) and "data" in payload and "errors" in payload


class EnvelopeMixin:
    """Wrap successful DRF responses in the standard envelope.

    Gate redirects are plain Django responses without ``.data`` and pass
    through untouched.
    """

    def finalize_response(self, request, response, *args, **kwargs):  # type: ignore[override]
        data = getattr(response, "data", None)
        if isinstance(response, Response) and response.status_code < 300 and response.status_code != 204:
            if not _is_enveloped(data):
                response.data = {"data": data, "errors": []}
        return super().finalize_response(request, response, *args, **kwargs)  # type: ignore[attr-defined]


class BaseAPIView(EnvelopeMixin, APIView):
    """APIView that ensures successful responses use the standard envelope."""


class BaseViewSet(EnvelopeMixin, ModelViewSet):
    """ModelViewSet variant that wraps successful responses in the envelope."""
