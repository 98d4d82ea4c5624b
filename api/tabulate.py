"""Vercel serverless function for tabulating ranked-choice elections."""

import json
import sys
from pathlib import Path
from urllib.parse import urlparse

import httpx

# Add the project root to the path so we can import rankedvote modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from rankedvote.election import ElectionError, tabulate_document


def handler(request):
    """Handle incoming requests to tabulate an election.

    Accepts:
    - POST with JSON body holding the election document:
      {"options": [...], "ballots": [...], "mode": "...", "borda_weight": n}
    - POST with JSON body {"url": "https://..."} pointing at such a document

    Returns JSON with every round's counts and the winner or tied options.
    """
    # Handle CORS preflight
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )

    if request.method != "POST":
        return create_response(
            {"error": "Method not allowed. Use POST."},
            status=405,
        )

    try:
        content_type = request.headers.get("content-type", "")

        if "application/json" not in content_type:
            return create_response(
                {"error": f"Unsupported content type: {content_type}"},
                status=400,
            )

        body = request.body.decode("utf-8")
        data = json.loads(body)

        if isinstance(data, dict) and "url" in data:
            url = data.get("url")
            if not url:
                return create_response(
                    {"error": "Missing 'url' in request body"},
                    status=400,
                )
            content = fetch_url(url)
        else:
            content = body

        result = tabulate_document(content)

        return create_response(result.to_dict())

    except ElectionError as e:
        return create_response(
            {"error": str(e)},
            status=400,
        )
    except json.JSONDecodeError as e:
        return create_response(
            {"error": f"Invalid JSON: {e}"},
            status=400,
        )
    except Exception as e:
        return create_response(
            {"error": f"Internal error: {e}"},
            status=500,
        )


def fetch_url(url: str) -> bytes:
    """Fetch an election document from a URL."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise ElectionError(f"Invalid URL scheme: {parsed.scheme}")

    try:
        with httpx.Client(follow_redirects=True, timeout=30.0) as client:
            response = client.get(url)
            response.raise_for_status()
            return response.content
    except httpx.HTTPStatusError as e:
        raise ElectionError(f"HTTP error fetching URL: {e.response.status_code}")
    except httpx.RequestError as e:
        raise ElectionError(f"Error fetching URL: {e}")


def create_response(body, status: int = 200, headers: dict = None):
    """Create a response object for Vercel."""
    response_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }
    if headers:
        response_headers.update(headers)

    if isinstance(body, dict):
        body = json.dumps(body)

    # Return in format expected by Vercel Python runtime
    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }
