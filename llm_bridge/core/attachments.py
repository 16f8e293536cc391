"""
Multi-modal attachment builder.

Image analysis sends one user message per image, in reference order, followed
by one trailing user message carrying the prompt text. Whether an image goes
out as a URL or as inline base64 bytes is the adapter's call.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from llm_bridge.providers.base.interfaces import IMAGE_INLINE, ProviderAdapter
from llm_bridge.providers.base.models import Attachment, Message

logger = logging.getLogger(__name__)

UNKNOWN_MIME = "unknown"

MIME_TYPES: Dict[str, str] = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
    "heic": "image/heic",
    "heif": "image/heif",
}

DownloadFn = Callable[[str], str]


def infer_mime_type(ref: str) -> str:
    """
    MIME type from the reference's file-extension suffix. Query strings and
    fragments are ignored. Unrecognized suffixes map to "unknown".
    """
    path = (ref or "").split("#", 1)[0].split("?", 1)[0]
    tail = path.rsplit("/", 1)[-1]
    if "." not in tail:
        return UNKNOWN_MIME
    return MIME_TYPES.get(tail.rsplit(".", 1)[-1].lower(), UNKNOWN_MIME)


def deferred_marker(ref: str) -> str:
    return f"[deferred download: {ref}]"


def build_image_messages(
    image_refs: Sequence[str],
    prompt: str,
    adapter: ProviderAdapter,
    download: Optional[DownloadFn] = None,
    fetch: bool = True,
) -> List[Message]:
    """
    Build the image-analysis message list.

    Inline-transport adapters fetch each image through `download`, one at a
    time in reference order. With fetch=False (debug_prompt) nothing is
    downloaded and a marker stands in for the bytes.

    Raises:
        UnsupportedCapabilityError: adapter has no image support. Raised before
            any download is attempted.
    """
    adapter.require_image_support()
    if isinstance(image_refs, str):
        image_refs = [image_refs]

    messages: List[Message] = []
    for ref in image_refs:
        mime = infer_mime_type(ref)
        data: Optional[str] = None
        if adapter.image_transport == IMAGE_INLINE:
            if fetch:
                if download is None:
                    raise ValueError("An image download primitive is required for inline images")
                logger.debug("Downloading image for inline attachment (%s)", mime)
                data = download(ref)
            else:
                data = deferred_marker(ref)
        messages.append(Message(role="user", content=[Attachment.of_image(ref, mime_type=mime, data=data)]))

    messages.append(Message(role="user", content=[Attachment.of_text(prompt)]))
    return messages
