#!/usr/bin/env python3
"""
Main entry point for deployment
Handles PORT environment variable and starts uvicorn
"""
import os
import uvicorn

if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))

    print(f"🚀 Starting Check Engine on port {port}")

    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=port,
        log_level="info"
    )
