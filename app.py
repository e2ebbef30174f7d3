from __future__ import annotations

import os

from levant.main import create_app

app = create_app()


if __name__ == "__main__":
    # One kiosk process; the state controller holds no locks.
    app.run(
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5000")),
        debug=app.config["DEBUG"],
        threaded=False,
        use_reloader=False,
    )
