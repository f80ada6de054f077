"""
URL Builder

Single definition of the externally servable file URL.
"""

from urllib.parse import quote

SERVE_FILE_ROUTE = "/functions/v1/serve-file-inline"

# Characters encodeURIComponent leaves untouched besides alphanumerics
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_file_url(base_url: str, storage_path: str, token: str) -> str:
    """
    Build the serve-file-inline URL for a storage path and token.

    Args:
        base_url: Origin hosting the serving endpoint
        storage_path: Object-store key
        token: File access token value

    Returns:
        ``{base_url}/functions/v1/serve-file-inline?path=...&token=...``
    """
    return (
        f"{base_url.rstrip('/')}{SERVE_FILE_ROUTE}"
        f"?path={encode_uri_component(storage_path)}"
        f"&token={encode_uri_component(token)}"
    )
