from django.conf import settings
from django.http import JsonResponse


async def healthz(request):
    return JsonResponse({"status": "ok", "ors_configured": bool(settings.ORS_API_KEY)})
