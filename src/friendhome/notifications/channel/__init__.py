"""Push channel registry — the adapter status alerts are dispatched through.

Uses the in-memory fake adapter by default. A real web-push adapter can be
installed with ``configure_push_channel`` at application start-up.
"""

from friendhome.notifications.channel.push_port import PushPort

_push_channel: PushPort | None = None


def get_push_channel() -> PushPort:
    """Return the configured push adapter (singleton)."""
    global _push_channel
    if _push_channel is None:
        from friendhome.notifications.channel.fake_push import FakePushAdapter

        _push_channel = FakePushAdapter()
    return _push_channel


def configure_push_channel(adapter: PushPort) -> None:
    global _push_channel
    _push_channel = adapter


def reset_channels():
    """Reset the channel singleton (useful for testing)."""
    global _push_channel
    _push_channel = None
