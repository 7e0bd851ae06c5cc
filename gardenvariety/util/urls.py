def join_path(*segments):
    """Joins path segments with a single ``/``, ignoring empty ones.

    ``join_path('/admin/', 'posts', 3)`` returns ``/admin/posts/3``.
    """
    parts = [str(s).strip("/") for s in segments if s is not None and str(s).strip("/")]
    return "/" + "/".join(parts)


def build_url(environ, base_url="/"):
    """Build a URL based on the given WSGI environ and a base URL.

    Paths starting with ``/`` are prefixed with the ``SCRIPT_NAME`` the
    application is mounted at, other URLs are returned untouched.
    """
    if base_url.startswith("/"):
        base_url = environ.get("SCRIPT_NAME", "") + base_url
    return base_url
