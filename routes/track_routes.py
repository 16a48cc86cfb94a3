# routes/track_routes.py
from core.injector import Injector
from routes.router import Router
from tracks.controllers import create_track, delete_track, get_track, get_tracks, update_track


# ------------------------------------------------------------
# 🔹 Registro de endpoints /tracks
# ------------------------------------------------------------
def register_track_routes(router: Router, injector: Injector) -> None:
    router.handle_with("GET", "/tracks", get_tracks).inject(injector)
    router.handle_with("GET", "/tracks/:id", get_track).inject(injector)
    router.handle_with("POST", "/tracks", create_track).inject(injector)
    router.handle_with("PUT", "/tracks/:id", update_track).inject(injector)
    router.handle_with("DELETE", "/tracks/:id", delete_track).inject(injector)
