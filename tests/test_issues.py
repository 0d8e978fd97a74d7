from civiceye.models.issue import Issue, IssueLocation
from civiceye.services.hype import hype_service

BASE = "/api/v1/issues"

NEW_ISSUE = {
    "title": "Overflowing drain",
    "description": "Sewage on the footpath",
    "issueType": "Sanitation",
    "location": {"latitude": 12.93, "longitude": 77.62, "address": "Koramangala"},
}


class TestCreateIssue:

    async def test_citizen_reports_issue(self, client, citizen, citizen_headers):
        response = await client.post(BASE, headers=citizen_headers, json=NEW_ISSUE)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Issue created"
        assert body["issue"]["hypePoints"] == 0
        assert body["issue"]["citizenId"] == str(citizen.id)
        assert body["issue"]["language"] == "en"

    async def test_duplicate_title_rejected(self, client, citizen_headers):
        await client.post(BASE, headers=citizen_headers, json=NEW_ISSUE)
        response = await client.post(BASE, headers=citizen_headers, json=NEW_ISSUE)

        assert response.status_code == 400
        assert response.json() == {"message": "Issue with this title already exists"}

    async def test_missing_location_rejected(self, client, citizen_headers):
        payload = {**NEW_ISSUE, "location": {"address": "somewhere"}}
        response = await client.post(BASE, headers=citizen_headers, json=payload)

        assert response.status_code == 400
        assert response.json() == {"message": "Please fill all the required fields"}

    async def test_requires_citizen(self, client):
        response = await client.post(BASE, json=NEW_ISSUE)
        assert response.status_code == 401


class TestListIssues:

    async def test_user_has_hyped_follows_caller(self, client, issue, citizen, citizen_headers):
        await hype_service.hype_issue(str(issue.id), citizen.id)

        mine = (await client.get(BASE, headers=citizen_headers)).json()["issues"]
        assert mine[0]["hypePoints"] == 1
        assert mine[0]["userHasHyped"] is True
        assert mine[0]["reportedBy"] == "Anonymous"

        anonymous = (await client.get(BASE)).json()["issues"]
        assert anonymous[0]["userHasHyped"] is False

    async def test_language_filter(self, client, db):
        for language in ("en", "hi", "kn"):
            await Issue(
                title=f"Issue in {language}",
                description="d",
                issue_type="Road",
                location=IssueLocation(latitude=1, longitude=1),
                language=language,
            ).insert()

        hindi = (await client.get(BASE, params={"language": "hi"})).json()["issues"]
        assert [i["title"] for i in hindi] == ["Issue in hi"]

        unsupported = (await client.get(BASE, params={"language": "fr"})).json()["issues"]
        assert len(unsupported) == 3

    async def test_reporter_name(self, client, citizen, citizen_headers):
        await client.post(BASE, headers=citizen_headers, json=NEW_ISSUE)

        issues = (await client.get(BASE)).json()["issues"]
        assert issues[0]["reportedBy"] == "Asha Rao"
