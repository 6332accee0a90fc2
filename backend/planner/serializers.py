"""Request validation for the route optimisation endpoint."""
from rest_framework import serializers


class OptimiseRouteRequestSerializer(serializers.Serializer):
    """Body of POST /api/optimise-route."""

    start = serializers.CharField(trim_whitespace=False)
    stops = serializers.ListField(
        child=serializers.CharField(
            allow_blank=True, allow_null=True, trim_whitespace=False
        ),
        allow_empty=False,
    )

    def validate_start(self, value: str) -> str:
        if not value.strip():
            raise serializers.ValidationError("This field may not be blank.")
        return value
