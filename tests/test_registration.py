import pytest

from idcards.drafts import DraftForm, PreviewImages
from idcards.errors import ApiError, ApiUnavailable, InvalidTransition
from idcards.registration import FAILURE_MESSAGE, SUCCESS_MESSAGE, Phase, RegistrationFlow
from idcards.services.api_client import UploadedFile

from tests.conftest import PHOTO, REGISTRATION, FakeApi


def make_flow():
    previews = PreviewImages()
    return RegistrationFlow(DraftForm(previews)), previews


def filled_flow():
    flow, previews = make_flow()
    flow.update(REGISTRATION, UploadedFile("photo.png", PHOTO, "image/png"))
    return flow, previews


def test_missing_fields_block_confirmation():
    flow, _ = make_flow()
    flow.update({"name": "A"})
    missing = flow.submit()
    assert flow.phase is Phase.EDITING
    assert "email" in missing
    assert "image" in missing
    assert "name" not in missing


def test_missing_image_blocks_confirmation():
    flow, _ = make_flow()
    flow.update(REGISTRATION)
    assert flow.submit() == ["image"]
    assert flow.phase is Phase.EDITING


def test_unknown_blood_group_blocks_confirmation():
    flow, _ = filled_flow()
    flow.update({"bloodGroup": "Z+"})
    assert flow.submit() == ["bloodGroup"]


def test_submit_then_cancel_keeps_draft():
    flow, _ = filled_flow()
    before = flow.draft.snapshot()
    assert flow.submit() == []
    assert flow.phase is Phase.CONFIRMING
    flow.cancel()
    assert flow.phase is Phase.EDITING
    assert flow.draft.snapshot() == before
    assert flow.draft.image is not None


def test_cancel_outside_confirmation_is_rejected():
    flow, _ = make_flow()
    with pytest.raises(InvalidTransition):
        flow.cancel()


@pytest.mark.asyncio
async def test_confirm_requires_confirmation_step():
    flow, _ = filled_flow()
    with pytest.raises(InvalidTransition):
        await flow.confirm(FakeApi())


@pytest.mark.asyncio
async def test_successful_confirm_clears_draft_and_preview():
    flow, previews = filled_flow()
    api = FakeApi()
    flow.submit()
    assert await flow.confirm(api)
    assert api.count("create_student") == 1
    fields, image = api.args("create_student")[0]
    assert fields == REGISTRATION
    assert image.content == PHOTO
    assert flow.phase is Phase.SUCCEEDED
    assert flow.message == SUCCESS_MESSAGE
    assert all(value == "" for value in flow.draft.fields.values())
    assert flow.draft.image is None
    assert flow.draft.preview_url is None
    assert len(previews) == 0


@pytest.mark.asyncio
async def test_rejected_confirm_keeps_draft_and_shows_server_message():
    flow, previews = filled_flow()
    preview_url = flow.draft.preview_url
    api = FakeApi()
    api.fail["create_student"] = ApiError("Duplicate roll number", 400)
    flow.submit()
    assert not await flow.confirm(api)
    assert flow.phase is Phase.FAILED
    assert flow.error == "Duplicate roll number"
    assert flow.draft.snapshot() == REGISTRATION
    assert flow.draft.preview_url == preview_url
    assert len(previews) == 1


@pytest.mark.asyncio
async def test_failure_without_message_uses_generic_text():
    flow, _ = filled_flow()
    api = FakeApi()
    api.fail["create_student"] = ApiError(None, 500)
    flow.submit()
    await flow.confirm(api)
    assert flow.error == FAILURE_MESSAGE


@pytest.mark.asyncio
async def test_transport_failure_reports_server_error():
    flow, _ = filled_flow()
    api = FakeApi()
    api.fail["create_student"] = ApiUnavailable("connection refused")
    flow.submit()
    await flow.confirm(api)
    assert flow.error == "Server error. Please try again."


@pytest.mark.asyncio
async def test_failed_flow_can_be_resubmitted():
    flow, _ = filled_flow()
    api = FakeApi()
    api.fail["create_student"] = ApiError("Duplicate roll number", 400)
    flow.submit()
    await flow.confirm(api)
    del api.fail["create_student"]
    assert flow.submit() == []
    assert flow.error is None
    assert await flow.confirm(api)
    assert api.count("create_student") == 2


def test_replacing_the_photo_revokes_the_old_preview():
    flow, previews = filled_flow()
    old_url = flow.draft.preview_url
    flow.update({}, UploadedFile("other.png", b"other", "image/png"))
    assert flow.draft.preview_url != old_url
    assert previews.get(old_url.rsplit("/", 1)[1]) is None
    assert len(previews) == 1


def test_picking_the_same_photo_again_keeps_the_preview():
    flow, previews = filled_flow()
    url = flow.draft.preview_url
    flow.update({}, UploadedFile("photo.png", PHOTO, "image/png"))
    assert flow.draft.preview_url == url
    assert len(previews) == 1
