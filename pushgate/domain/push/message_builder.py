"""Map request schemas onto firebase_admin.messaging types."""
import math
from datetime import timedelta
from typing import Optional, Union

from firebase_admin import messaging

from pushgate.domain.common.errors import ValidationError
from pushgate.domain.push import schemas


def _none_if_empty(value: Optional[str]) -> Optional[str]:
    return value or None


def _parse_ttl(ttl: Union[float, str, None]) -> Optional[timedelta]:
    """Accept seconds (number) or an FCM duration string such as "3.5s"."""
    if ttl is None:
        return None
    if isinstance(ttl, str):
        raw = ttl.strip()
        if raw.endswith("s"):
            raw = raw[:-1]
        try:
            seconds = float(raw)
        except ValueError:
            raise ValidationError(f"ttl is wrong: {ttl!r}")
    else:
        seconds = float(ttl)
    if not math.isfinite(seconds) or seconds < 0:
        raise ValidationError(f"ttl is wrong: {ttl!r}")
    try:
        return timedelta(seconds=seconds)
    except OverflowError:
        raise ValidationError(f"ttl is wrong: {ttl!r}")


def build_android(config: Optional[schemas.AndroidConfig]) -> Optional[messaging.AndroidConfig]:
    if config is None:
        return None
    notification = None
    if config.notification is not None:
        n = config.notification
        notification = messaging.AndroidNotification(
            title=n.title,
            body=n.body,
            icon=n.icon,
            color=n.color,
            sound=n.sound,
            tag=n.tag,
            click_action=n.click_action,
            body_loc_key=n.body_loc_key,
            body_loc_args=n.body_loc_args,
            title_loc_key=n.title_loc_key,
            title_loc_args=n.title_loc_args,
            channel_id=n.channel_id,
            image=n.image,
            ticker=n.ticker,
            sticky=n.sticky,
            local_only=n.local_only,
            priority=n.notification_priority,
            default_sound=n.default_sound,
            visibility=n.visibility,
            notification_count=n.notification_count,
        )
    fcm_options = None
    if config.fcm_options is not None:
        fcm_options = messaging.AndroidFCMOptions(analytics_label=config.fcm_options.analytics_label)
    return messaging.AndroidConfig(
        collapse_key=_none_if_empty(config.collapse_key),
        priority=_none_if_empty(config.priority),
        ttl=_parse_ttl(config.ttl),
        restricted_package_name=_none_if_empty(config.restricted_package_name),
        data=config.data or None,
        notification=notification,
        fcm_options=fcm_options,
        direct_boot_ok=config.direct_boot_ok,
    )


def _build_aps(aps: schemas.Aps) -> messaging.Aps:
    alert = aps.alert
    if isinstance(alert, schemas.ApsAlert):
        alert = messaging.ApsAlert(
            title=alert.title,
            subtitle=alert.subtitle,
            body=alert.body,
            loc_key=alert.loc_key,
            loc_args=alert.loc_args,
            title_loc_key=alert.title_loc_key,
            title_loc_args=alert.title_loc_args,
            subtitle_loc_key=alert.subtitle_loc_key,
            subtitle_loc_args=alert.subtitle_loc_args,
            action_loc_key=alert.action_loc_key,
            launch_image=alert.launch_image,
        )
    sound = aps.sound
    if isinstance(sound, schemas.CriticalSound):
        sound = messaging.CriticalSound(name=sound.name, critical=sound.critical, volume=sound.volume)
    return messaging.Aps(
        alert=alert,
        badge=aps.badge,
        sound=sound,
        content_available=aps.content_available,
        category=aps.category,
        thread_id=aps.thread_id,
        mutable_content=aps.mutable_content,
        custom_data=dict(aps.model_extra) if aps.model_extra else None,
    )


def build_apns(config: Optional[schemas.APNSConfig]) -> Optional[messaging.APNSConfig]:
    if config is None:
        return None
    payload = None
    if config.payload is not None:
        custom = dict(config.payload.model_extra or {})
        payload = messaging.APNSPayload(_build_aps(config.payload.aps), **custom)
    fcm_options = None
    if config.fcm_options is not None:
        fcm_options = messaging.APNSFCMOptions(
            analytics_label=config.fcm_options.analytics_label,
            image=config.fcm_options.image,
        )
    return messaging.APNSConfig(headers=config.headers, payload=payload, fcm_options=fcm_options)


def build_webpush(config: Optional[schemas.WebpushConfig]) -> Optional[messaging.WebpushConfig]:
    if config is None:
        return None
    notification = None
    if config.notification is not None:
        n = config.notification
        actions = None
        if n.actions:
            actions = [
                messaging.WebpushNotificationAction(action=a.action, title=a.title, icon=a.icon)
                for a in n.actions
            ]
        notification = messaging.WebpushNotification(
            title=n.title,
            body=n.body,
            icon=n.icon,
            actions=actions,
            badge=n.badge,
            data=n.data,
            direction=n.direction,
            image=n.image,
            language=n.language,
            renotify=n.renotify,
            require_interaction=n.require_interaction,
            silent=n.silent,
            tag=n.tag,
            timestamp_millis=n.timestamp_millis,
            vibrate=n.vibrate,
        )
    fcm_options = None
    if config.fcm_options is not None:
        fcm_options = messaging.WebpushFCMOptions(link=config.fcm_options.link)
    return messaging.WebpushConfig(
        headers=config.headers,
        data=config.data,
        notification=notification,
        fcm_options=fcm_options,
    )


def build_message(
    request: Union[schemas.NotificationRequest, schemas.MulticastNotificationRequest],
    token: Optional[str] = None,
) -> messaging.Message:
    """Build one vendor message. ``token`` overrides the request token (multicast fan-out).

    Topic and condition are passed through as given; the SDK rejects a message that
    names more than one target and that rejection is reported like any send failure.
    """
    if token is None:
        token = request.token
    return messaging.Message(
        notification=messaging.Notification(
            title=_none_if_empty(request.title),
            body=_none_if_empty(request.body),
            image=_none_if_empty(request.image_url),
        ),
        token=_none_if_empty(token),
        data=request.data or None,
        android=build_android(request.android),
        apns=build_apns(request.apns),
        webpush=build_webpush(request.webpush),
        topic=_none_if_empty(request.topic),
        condition=_none_if_empty(request.condition),
        fcm_options=messaging.FCMOptions(request.fcm_options.analytics_label) if request.fcm_options else None,
    )
