def success(data=None, code: int = 200, message: str = None, **extra) -> dict:
    body = {"code": code, "status": "success"}
    if message:
        body["message"] = message
    body.update(extra)
    body["data"] = data
    return body
