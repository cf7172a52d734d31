"""Admin notification, webhook and communication routes"""

from fastapi import APIRouter, Depends, Request

from ..security.auth import require_bearer
from ..services.backend_client import BackendClient
from .admin_proxy import forward
from .deps import get_backend_client

router = APIRouter(prefix="/api/admin", tags=["Admin Notifications"])


# ==================== Notification settings ====================

@router.get("/notifications/settings")
async def get_notification_settings(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "GET", "/api/notifications/settings", "Failed to fetch notification settings"
    )


@router.put("/notifications/settings")
async def update_notification_settings(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "PUT", "/api/notifications/settings", "Failed to update notification settings"
    )


@router.post("/notifications/test-email")
async def send_test_email(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "POST", "/api/notifications/test-email", "Failed to send test email"
    )


@router.post("/notifications/test-webhook")
async def send_test_webhook(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "POST", "/api/notifications/test-webhook", "Failed to send test webhook"
    )


# ==================== Notification feed ====================

@router.get("/notifications")
async def list_notifications(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(request, backend, "GET", "/api/notifications-api", "Failed to fetch notifications")


@router.get("/notifications/unread-count")
async def unread_notification_count(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "GET", "/api/notifications-api/unread-count", "Failed to fetch unread count"
    )


@router.put("/notifications/mark-all-read")
async def mark_all_notifications_read(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "PUT", "/api/notifications-api/mark-all-read", "Failed to mark notifications as read"
    )


@router.put("/notifications/{notification_id}/read")
async def mark_notification_read(
    notification_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request,
        backend,
        "PUT",
        f"/api/notifications-api/{notification_id}/read",
        "Failed to mark notification as read",
    )


@router.delete("/notifications/{notification_id}")
async def delete_notification(
    notification_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request,
        backend,
        "DELETE",
        f"/api/notifications-api/{notification_id}",
        "Failed to delete notification",
    )


# ==================== Webhooks ====================

@router.get("/webhooks/settings")
async def get_webhook_settings(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(request, backend, "GET", "/api/webhooks/settings", "Failed to fetch webhook settings")


@router.put("/webhooks/settings")
async def update_webhook_settings(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(request, backend, "PUT", "/api/webhooks/settings", "Failed to update webhook settings")


@router.post("/webhooks/test/{platform}")
async def test_webhook(
    platform: str,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "POST", f"/api/webhooks/test/{platform}", f"Failed to test {platform} webhook"
    )


# ==================== Communication ====================

@router.get("/communication/logs", dependencies=[Depends(require_bearer)])
async def communication_logs(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "GET", "/api/communication/logs", "Failed to fetch communication logs"
    )
