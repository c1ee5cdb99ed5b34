"""Integration test for the sync and sharing workflow across users."""


class TestNoteSharingWorkflow:
    """From syncing a note to another user discovering it."""

    async def test_complete_sharing_workflow(self, async_client, headers_for):
        alice = headers_for("user-alice", "alice@example.com")
        carol = headers_for("user-carol", "carol@example.com")
        bob = headers_for("user-bob", "bob@example.com")

        # Step 1: alice syncs a private note and one shared with bob
        shared = (
            "---\n"
            "visibility:\n"
            "  - friends\n"
            "visibility_emails:\n"
            "  friends:\n"
            "    - BOB@example.com\n"
            "---\n"
            "\n"
            "Dinner on friday?"
        )
        response = await async_client.post(
            "/api/notes",
            json={
                "notes": [
                    {"id": "dinner", "markdown": shared, "sourceName": "dinner.md", "lastModified": 1000},
                    {"id": "diary", "markdown": "note to self about bob@example.com", "lastModified": 2000},
                ],
                "visibilityTerms": [{"term": "friends", "emails": ["bob@example.com"]}],
            },
            headers=alice,
        )
        assert response.status_code == 200
        assert [n["id"] for n in response.json()["notes"]] == ["diary", "dinner"]

        # Step 2: carol shares her own note with bob, same timestamp
        carol_note = shared.replace("Dinner on friday?", "Book club")
        await async_client.post(
            "/api/notes",
            json={"notes": [{"id": "club", "markdown": carol_note, "lastModified": 1000}]},
            headers=carol,
        )

        # Step 3: bob sees both shared notes, never alice's diary
        response = await async_client.get("/api/shared-notes", headers=bob)
        assert response.status_code == 200
        notes = response.json()["notes"]
        assert [n["id"] for n in notes] == ["club", "dinner"]
        assert notes[1]["body"] == "Dinner on friday?"
        assert notes[1]["sourceName"] == "dinner.md"

        # Step 4: an older edit from a stale device does not win
        stale = shared.replace("Dinner on friday?", "stale")
        await async_client.post(
            "/api/notes",
            json={"notes": [{"id": "dinner", "markdown": stale, "lastModified": 500}]},
            headers=alice,
        )
        response = await async_client.get("/api/shared-notes", headers=bob)
        assert response.json()["notes"][1]["body"] == "Dinner on friday?"

        # Step 5: alice removes bob from the note, it disappears for him
        private = shared.replace("BOB@example.com", "dave@example.com")
        await async_client.post(
            "/api/notes",
            json={"notes": [{"id": "dinner", "markdown": private, "lastModified": 3000}]},
            headers=alice,
        )
        response = await async_client.get("/api/shared-notes", headers=bob)
        assert [n["id"] for n in response.json()["notes"]] == ["club"]

        # Step 6: deleting everything leaves alice with an empty collection
        await async_client.delete("/api/notes", headers=alice)
        response = await async_client.get("/api/notes", headers=alice)
        assert response.json() == {"notes": [], "visibilityTerms": []}
