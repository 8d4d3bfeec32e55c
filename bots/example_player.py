"""Reference player that drives the sheet server via the REST API.

Creates a hunter, raises their attributes, packs too much equipment, and
rolls each attribute once (courage as a curse roll), printing the chat log.

Usage:
    1. Start the server:  uvicorn main:app --reload
    2. Run this script:   python bots/example_player.py

Environment variables:
    YHS_URL: Server URL (default: http://127.0.0.1:8000)
"""

import os
import sys

import httpx

BASE_URL = os.environ.get("YHS_URL", "http://127.0.0.1:8000")


def _print_notifications(data: dict) -> None:
    for note in data.get("notifications", []):
        print(f"  [{note['level']}] {note['message']}")


def main() -> None:
    """Play one short session with a single hunter."""
    client = httpx.Client(base_url=BASE_URL, timeout=10.0)

    try:
        client.get("/health").raise_for_status()
    except httpx.ConnectError:
        print(f"Error: Could not connect to server at {BASE_URL}", file=sys.stderr)
        sys.exit(1)

    print("Creating hunter...")
    resp = client.post("/actors", json={
        "name": "Aiko Tanaka",
        "type": "hunter",
        "health": {"max": 12, "value": 12},
    })
    resp.raise_for_status()
    hunter = resp.json()["actor"]
    hunter_id = hunter["id"]
    print(f"  {hunter['name']} ({hunter_id})")

    # Ask for two 5s: the second one is refused by the tier rule
    print("\nSetting attributes...")
    resp = client.patch(f"/actors/{hunter_id}", json={"attributes": {"courage": 5}})
    resp.raise_for_status()
    resp = client.patch(f"/actors/{hunter_id}", json={
        "attributes": {"wisdom": 5, "sharpness": 3, "self_control": 2},
    })
    resp.raise_for_status()
    _print_notifications(resp.json())
    print(f"  {resp.json()['actor']['attributes']}")

    print("\nPacking equipment...")
    charm_id = None
    for i in range(10):
        resp = client.post(f"/actors/{hunter_id}/items", json={
            "name": "Paper charm" if i == 0 else f"Supplies #{i}",
            "bonus": 2 if i == 0 else 0,
        })
        resp.raise_for_status()
        if i == 0:
            charm_id = resp.json()["item"]["id"]

    sheet = client.get(f"/actors/{hunter_id}").json()
    print(f"  Carrying {len(sheet['equipment'])} items, "
          f"encumbrance penalty {sheet['encumbrance_penalty']}")

    print("\nRolling...")
    for attribute in ("courage", "self_control", "wisdom", "sharpness"):
        payload = {"attribute": attribute, "roll_type": "normal"}
        if attribute == "courage":
            payload["curse_roll"] = True
            payload["equipment_id"] = charm_id
        resp = client.post(f"/actors/{hunter_id}/roll", json=payload)
        if resp.status_code != 200:
            print(f"  -> FAILED: {resp.json().get('detail', resp.text)}")
            continue
        data = resp.json()
        _print_notifications(data)
        print(f"  -> {data['message']['content']}")

    sheet = client.get(f"/actors/{hunter_id}").json()
    print(f"\nCurse resistance left: {sheet['curse_resistance_left']}")

    print("\n--- CHAT LOG ---\n")
    for message in client.get("/chat").json():
        print(f"  {message['content']}")

    client.close()


if __name__ == "__main__":
    main()
