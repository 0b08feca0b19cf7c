# =========================================================
# Input serializers for the dashboard and insurance
# endpoints. Output is built from the DTOs (`asdict`).
# =========================================================
from rest_framework import serializers

TIMELINE_TYPES = ("appointment", "result", "bill")


# ───────────────────────────────────────────────
# Timeline
# ───────────────────────────────────────────────
class TimelineQuerySerializer(serializers.Serializer):
    """`?types=appointment,result`; empty or absent means every type."""
    types = serializers.CharField(required=False, allow_blank=True)

    def validate_types(self, value: str) -> list[str]:
        types = [t.strip() for t in value.split(",") if t.strip()]
        unknown = sorted(set(types) - set(TIMELINE_TYPES))
        if unknown:
            raise serializers.ValidationError(f"Unknown event type(s): {', '.join(unknown)}")
        return types


# ───────────────────────────────────────────────
# Insurance coverage
# ───────────────────────────────────────────────
class AnalyzeCoverageSerializer(serializers.Serializer):
    pdf_text = serializers.CharField(
        error_messages={
            "required": "PDF text is required",
            "blank": "No text could be extracted from the PDF",
        },
    )
