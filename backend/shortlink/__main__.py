"""shortlink entrypoint.

Run with:
  python -m shortlink
"""

import uvicorn

from shortlink.config import settings

def main() -> None:
    uvicorn.run("shortlink.main:app", host=settings.host, port=settings.port)

if __name__ == "__main__":
    main()
