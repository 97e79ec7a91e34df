"""
Query and body validation for the museum proxy.

Field names follow the museum API's own parameter names (``hasImages``,
``departmentIds``...) so clients can pass them through unchanged.
"""

from django.conf import settings
from rest_framework import serializers


class SearchQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, default="*", allow_blank=False)
    hasImages = serializers.BooleanField(required=False, default=True)


class PeriodQuerySerializer(serializers.Serializer):
    departmentIds = serializers.RegexField(
        r"^\d+(\|\d+)*$", required=False, default="11"
    )
    dateBegin = serializers.IntegerField(required=False, default=-3000)
    dateEnd = serializers.IntegerField(required=False, default=2024)
    hasImages = serializers.BooleanField(required=False, default=True)


class BatchSerializer(serializers.Serializer):
    ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1), allow_empty=False
    )

    def validate_ids(self, ids):
        return ids[: settings.MET_MUSEUM_BATCH_LIMIT]
