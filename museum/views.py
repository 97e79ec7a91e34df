"""
Public proxy for the Metropolitan Museum of Art open access API.

Endpoints
---------
- GET  /api/met/object/{id}/   One object record (404 if unknown).
- GET  /api/met/search/        Object ids for ``q`` (degrades to an empty result).
- GET  /api/met/period/        Object ids by department and date range.
- POST /api/met/batch/         Object records for up to 20 ``ids``.

The proxy keeps browsers off the museum's CORS and rate limits and caches
responses (see `museum.client.MetMuseumClient`).
"""

import logging

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from .client import MetMuseumClient, MetMuseumError
from .serializers import BatchSerializer, PeriodQuerySerializer, SearchQuerySerializer

logger = logging.getLogger(__name__)


@extend_schema(tags=["Met Museum"])
class MuseumViewSet(ViewSet):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get_client(self):
        return MetMuseumClient()

    @extend_schema(
        summary="Get Object",
        responses={200: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
    )
    @action(
        detail=False,
        methods=["get"],
        url_path=r"object/(?P<object_id>\d+)",
        url_name="object",
    )
    def object_detail(self, request, object_id=None):
        try:
            data = self.get_client().get_object(object_id)
        except MetMuseumError:
            logger.exception("Met Museum object %s lookup failed", object_id)
            return Response(
                {"error": "Failed to fetch object"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        if not data:
            return Response({"error": "Object not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(data)

    @extend_schema(
        summary="Search",
        parameters=[
            OpenApiParameter("q", str, description="Free-text query (default `*`)."),
            OpenApiParameter("hasImages", bool, description="Only objects with images."),
        ],
        responses={200: OpenApiTypes.OBJECT},
    )
    @action(detail=False, methods=["get"])
    def search(self, request):
        failed = Response({"error": "Search failed", "objectIDs": []})

        params = SearchQuerySerializer(data=request.query_params.dict())
        if not params.is_valid():
            return failed

        try:
            data = self.get_client().search(
                params.validated_data["q"], params.validated_data["hasImages"]
            )
        except MetMuseumError:
            logger.exception("Met Museum search failed")
            return failed

        return Response(data) if data else failed

    @extend_schema(
        summary="Objects by Period",
        parameters=[
            OpenApiParameter(
                "departmentIds", str, description="Pipe-separated ids (default `11`)."
            ),
            OpenApiParameter("dateBegin", int),
            OpenApiParameter("dateEnd", int),
            OpenApiParameter("hasImages", bool),
        ],
        responses={200: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
    )
    @action(detail=False, methods=["get"])
    def period(self, request):
        params = PeriodQuerySerializer(data=request.query_params.dict())
        params.is_valid(raise_exception=True)
        query = params.validated_data

        try:
            data = self.get_client().objects_by_period(
                query["departmentIds"],
                query["dateBegin"],
                query["dateEnd"],
                query["hasImages"],
            )
        except MetMuseumError:
            logger.exception("Met Museum period lookup failed")
            return Response(
                {"error": "Failed to fetch objects"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        if not data:
            return Response({"error": "No objects found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(data)

    @extend_schema(
        summary="Batch Objects",
        request=BatchSerializer,
        responses={200: OpenApiTypes.OBJECT},
    )
    @action(detail=False, methods=["post"])
    def batch(self, request):
        serializer = BatchSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"error": "Invalid object IDs"}, status=status.HTTP_400_BAD_REQUEST
            )

        return Response(self.get_client().get_batch(serializer.validated_data["ids"]))
