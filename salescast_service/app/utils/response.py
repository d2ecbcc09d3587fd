#!/usr/bin/env python3
"""
Standardized API response builders
"""

from typing import Any, Dict

def success_response(data: Any, message: str = "Success") -> Dict[str, Any]:
    """Build a success response"""
    return {
        "success": True,
        "message": message,
        "data": data
    }
