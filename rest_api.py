import time
from fastapi import (
    FastAPI,
    HTTPException,
    Response,
    Request,
    Header,
    Depends,
)

from config import APP_VERSION
from gamification_service import GamificationService
from session_draft import CallerIndexError
from settings_schema import load_settings


class RateLimiter:
    """Simple in-memory rate limiter."""

    def __init__(self, limit: int = 60, window: int = 60) -> None:
        self.limit = limit
        self.window = window
        self.requests: dict[str, list[float]] = {}

    def _prune(self, now: float) -> None:
        for ip in list(self.requests):
            history = [t for t in self.requests[ip] if now - t < self.window]
            if history:
                self.requests[ip] = history
            else:
                del self.requests[ip]

    async def __call__(self, request: Request, call_next):
        ip = request.client.host if request.client else "anon"
        now = time.time()
        self._prune(now)
        history = self.requests.get(ip, [])
        if len(history) >= self.limit:
            return Response("rate limit exceeded", status_code=429)
        history.append(now)
        self.requests[ip] = history
        return await call_next(request)


class XPTrackerAPI:
    """Provides REST endpoints for the workout XP tracker."""

    def __init__(
        self,
        db_path: str = "xp_tracker.db",
        yaml_path: str = "settings.yaml",
        *,
        rate_limit: int | None = None,
        rate_window: int = 60,
    ) -> None:
        self.settings = load_settings(yaml_path)
        self.service = GamificationService.from_settings(db_path, self.settings)
        self.app = FastAPI(
            title="XP Tracker API",
            description="REST API for workout XP, levels and session history",
            version=APP_VERSION,
        )
        self.limiter = None
        if rate_limit is not None:
            self.limiter = RateLimiter(limit=rate_limit, window=rate_window)
            self.app.middleware("http")(self.limiter)
        self._setup_routes()

    def _check_key(self, x_api_key: str | None = Header(None)) -> None:
        expected = self.settings.api_key
        if expected and x_api_key != expected:
            raise HTTPException(status_code=401, detail="invalid api key")

    @staticmethod
    def _call(func, *args):
        try:
            return func(*args)
        except CallerIndexError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    def _setup_routes(self) -> None:
        app = self.app
        svc = self.service
        auth = [Depends(self._check_key)]

        @app.get("/health")
        def health():
            return {"status": "ok"}

        @app.get("/status", dependencies=auth)
        def status():
            return svc.status().to_json_dict()

        @app.get("/levels", dependencies=auth)
        def levels():
            return list(svc.store.resolver.table.thresholds)

        @app.get("/today", dependencies=auth)
        def today():
            return svc.today.to_json_dict()

        @app.get("/today/breakdown", dependencies=auth)
        def breakdown():
            return svc.breakdown().to_json_dict()

        @app.post("/today/items/{index}/toggle", dependencies=auth)
        def toggle_item(index: int):
            return self._call(svc.toggle_item, index).to_json_dict()

        @app.post("/today/items/{index}/update", dependencies=auth)
        def update_item(index: int, field: str, value: str):
            return self._call(svc.update_item, index, field, value).to_json_dict()

        @app.post("/today/extras", dependencies=auth)
        def add_extra():
            draft = svc.add_extra()
            return {"index": len(draft.extras) - 1, "key": draft.extras[-1].key}

        @app.post("/today/extras/{index}/toggle", dependencies=auth)
        def toggle_extra(index: int):
            return self._call(svc.toggle_extra, index).to_json_dict()

        @app.post("/today/extras/{index}/update", dependencies=auth)
        def update_extra(index: int, field: str, value: str):
            return self._call(svc.update_extra, index, field, value).to_json_dict()

        @app.post("/today/extras/{index}/rename", dependencies=auth)
        def rename_extra(index: int, name: str):
            return self._call(svc.rename_extra, index, name).to_json_dict()

        @app.post("/today/leg_ext/toggle", dependencies=auth)
        def toggle_leg_ext():
            return svc.toggle_leg_ext().to_json_dict()

        @app.post("/today/leg_ext/update", dependencies=auth)
        def update_leg_ext(field: str, value: str):
            return self._call(svc.update_leg_ext, field, value).to_json_dict()

        @app.post("/today/run", dependencies=auth)
        def set_run(meters: str):
            return svc.set_run_meters(meters).to_json_dict()

        @app.post("/today/commit", dependencies=auth)
        def commit():
            entry = svc.commit()
            return {"entry": entry.to_json_dict(), "totalXP": svc.state.total_xp}

        @app.post("/today/reset", dependencies=auth)
        def reset_today():
            return svc.reset_today().to_json_dict()

        @app.post("/reset", dependencies=auth)
        def hard_reset(confirm: bool = False):
            self._call(svc.hard_reset, confirm)
            return {"status": "reset"}

        @app.post("/total_xp", dependencies=auth)
        def override_total_xp(value: str):
            state = svc.override_total_xp(value)
            return {"totalXP": state.total_xp}

        @app.get("/notes", dependencies=auth)
        def notes():
            return [n.to_json_dict() for n in svc.notes]

        @app.get("/export", dependencies=auth)
        def export_backup():
            filename, blob = svc.export_backup()
            return Response(
                content=blob,
                media_type="application/json",
                headers={"Content-Disposition": f'attachment; filename="{filename}"'},
            )

        @app.post("/import", dependencies=auth)
        async def import_backup(request: Request):
            blob = await request.body()
            state = self._call(svc.import_backup, blob)
            return {"status": "imported", "totalXP": state.total_xp}


api = XPTrackerAPI()
app = api.app

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app)
