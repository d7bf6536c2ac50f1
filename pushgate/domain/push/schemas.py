"""Request schemas mirroring the FCM message JSON.

Field names follow the FCM v1 JSON (snake_case for Android and APNs FCM
options, hyphenated APNs ``aps`` keys, camelCase Web Push keys). Every model
also accepts the Python attribute name.
"""
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FCMOptions(_Schema):
    analytics_label: Optional[str] = None


# --- Android ---


class AndroidFCMOptions(_Schema):
    analytics_label: Optional[str] = None


class AndroidNotification(_Schema):
    title: Optional[str] = None
    body: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None  # #rrggbb
    sound: Optional[str] = None
    tag: Optional[str] = None
    click_action: Optional[str] = None
    body_loc_key: Optional[str] = None
    body_loc_args: Optional[list[str]] = None
    title_loc_key: Optional[str] = None
    title_loc_args: Optional[list[str]] = None
    channel_id: Optional[str] = None
    image: Optional[str] = None
    ticker: Optional[str] = None
    sticky: Optional[bool] = None
    local_only: Optional[bool] = None
    notification_priority: Optional[Literal["min", "low", "default", "high", "max"]] = None
    default_sound: Optional[bool] = None
    visibility: Optional[Literal["private", "public", "secret"]] = None
    notification_count: Optional[int] = None


class AndroidConfig(_Schema):
    collapse_key: Optional[str] = None
    priority: Optional[str] = None  # "high" | "normal"; vendor validates on HTTP
    ttl: Optional[Union[float, str]] = None  # seconds, or duration string like "3.5s"
    restricted_package_name: Optional[str] = None
    data: Optional[dict[str, str]] = None
    notification: Optional[AndroidNotification] = None
    fcm_options: Optional[AndroidFCMOptions] = None
    direct_boot_ok: Optional[bool] = None


# --- APNs (iOS) ---


class ApsAlert(_Schema):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    body: Optional[str] = None
    loc_key: Optional[str] = Field(default=None, alias="loc-key")
    loc_args: Optional[list[str]] = Field(default=None, alias="loc-args")
    title_loc_key: Optional[str] = Field(default=None, alias="title-loc-key")
    title_loc_args: Optional[list[str]] = Field(default=None, alias="title-loc-args")
    subtitle_loc_key: Optional[str] = Field(default=None, alias="subtitle-loc-key")
    subtitle_loc_args: Optional[list[str]] = Field(default=None, alias="subtitle-loc-args")
    action_loc_key: Optional[str] = Field(default=None, alias="action-loc-key")
    launch_image: Optional[str] = Field(default=None, alias="launch-image")


class CriticalSound(_Schema):
    name: str
    critical: Optional[bool] = None
    volume: Optional[float] = None


class Aps(_Schema):
    """``aps`` dictionary. Unknown keys are kept and forwarded as custom data."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    alert: Optional[Union[str, ApsAlert]] = None
    badge: Optional[int] = None
    sound: Optional[Union[str, CriticalSound]] = None
    content_available: Optional[bool] = Field(default=None, alias="content-available")
    mutable_content: Optional[bool] = Field(default=None, alias="mutable-content")
    category: Optional[str] = None
    thread_id: Optional[str] = Field(default=None, alias="thread-id")


class APNSPayload(_Schema):
    """APNs payload: ``aps`` plus arbitrary custom top-level keys."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    aps: Aps


class APNSFCMOptions(_Schema):
    analytics_label: Optional[str] = None
    image: Optional[str] = None


class APNSConfig(_Schema):
    headers: Optional[dict[str, str]] = None
    payload: Optional[APNSPayload] = None
    fcm_options: Optional[APNSFCMOptions] = None


# --- Web Push ---


class WebpushNotificationAction(_Schema):
    action: str
    title: str
    icon: Optional[str] = None


class WebpushNotification(_Schema):
    title: Optional[str] = None
    body: Optional[str] = None
    icon: Optional[str] = None
    actions: Optional[list[WebpushNotificationAction]] = None
    badge: Optional[str] = None
    data: Optional[Any] = None
    direction: Optional[Literal["auto", "ltr", "rtl"]] = Field(default=None, alias="dir")
    image: Optional[str] = None
    language: Optional[str] = Field(default=None, alias="lang")
    renotify: Optional[bool] = None
    require_interaction: Optional[bool] = Field(default=None, alias="requireInteraction")
    silent: Optional[bool] = None
    tag: Optional[str] = None
    timestamp_millis: Optional[int] = Field(default=None, alias="timestamp")
    vibrate: Optional[list[int]] = None


class WebpushFCMOptions(_Schema):
    link: Optional[str] = None


class WebpushConfig(_Schema):
    headers: Optional[dict[str, str]] = None
    data: Optional[dict[str, str]] = None
    notification: Optional[WebpushNotification] = None
    fcm_options: Optional[WebpushFCMOptions] = None


# --- Requests ---


class _NotificationFields(_Schema):
    title: str = ""
    body: str = ""
    image_url: str = Field(default="", alias="imageUrl")
    data: Optional[dict[str, str]] = None
    android: Optional[AndroidConfig] = None
    apns: Optional[APNSConfig] = Field(default=None, alias="ios")
    webpush: Optional[WebpushConfig] = None
    topic: str = ""
    fcm_options: Optional[FCMOptions] = Field(default=None, alias="fcmoptions")
    condition: str = ""


class NotificationRequest(_NotificationFields):
    """Single recipient. Also the item type of a bulk request."""
    token: str = ""


class MulticastNotificationRequest(_NotificationFields):
    """One notification sent to every token in the list."""
    token: list[str] = Field(default_factory=list)


class SendResponse(BaseModel):
    message: str
    response: Union[str, list[str]]
