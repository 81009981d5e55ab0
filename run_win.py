"""Start the Wolfpack API on Windows: python run_win.py"""
import asyncio
import sys

import uvicorn

if __name__ == "__main__":
    if sys.platform == "win32":
        # Typing and chat sockets need the Proactor loop
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())
    uvicorn.run("wolfpack.main:app", host="0.0.0.0", port=8000, loop="none")
