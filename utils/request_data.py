def body_dict(request):
    """Parsed request body, or an empty dict when the body is not a JSON object."""
    return request.data if isinstance(request.data, dict) else {}
