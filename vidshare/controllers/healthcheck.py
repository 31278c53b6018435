from litestar import Response, get

from vidshare.lib.responses import envelope


@get("/healthcheck")
async def healthcheck() -> Response:
    return envelope({"status": "ok"}, "OK")
