"""Visual style workspace: master visual generation/refinement and moodboard.

Input checks run before any request is sent; a failed check raises
ValidationError with the message shown to the user.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from src.exceptions import ValidationError
from src.schemas.studio import ProjectDetails, ReferenceImage
from src.services.studio_rpc_client import StudioRpcClient
from src.utils.data_url import image_to_data_url

logger = logging.getLogger(__name__)

SCRIPT_REQUIRED_MESSAGE = "Please create a script first"
VISUAL_REQUIRED_MESSAGE = "Please generate or enter a visual style first"
NOTES_REQUIRED_MESSAGE = "Please add comments for refinement"


@dataclass
class VisualStyleState:
    master_visual: str = ""
    notes: str = ""
    reference_images: list[ReferenceImage] = field(default_factory=list)


class VisualStyleService:
    def __init__(self, client: StudioRpcClient, project_id: int) -> None:
        self._client = client
        self.project_id = project_id
        self.state = VisualStyleState()
        self._project: ProjectDetails | None = None

    async def load(self) -> VisualStyleState:
        """Fetch the project and its moodboard; adopt a saved master visual."""
        self._project = await self._client.get_project(self.project_id)
        content = self._project.content
        if content is not None and content.master_visual:
            self.state.master_visual = content.master_visual
        await self.refresh_reference_images()
        return self.state

    async def save(self) -> None:
        await self._client.update_master_visual(self.project_id, self.state.master_visual)
        logger.info("Saved visual style for project %s", self.project_id)

    async def generate(self) -> str:
        """Generate the master visual from the project's script."""
        if self._project is None:
            self._project = await self._client.get_project(self.project_id)
        script = self._project.content.script if self._project.content else None
        if not script or not script.strip():
            raise ValidationError(SCRIPT_REQUIRED_MESSAGE, field="script")

        result = await self._client.generate_visual_style(script)
        self.state.master_visual = result.content
        await self.save()
        self._project = await self._client.get_project(self.project_id)
        return result.content

    async def refine(self, notes: str | None = None) -> str:
        """Refine the master visual with director notes, then clear the notes."""
        if notes is not None:
            self.state.notes = notes
        if not self.state.master_visual.strip():
            raise ValidationError(VISUAL_REQUIRED_MESSAGE, field="master_visual")
        if not self.state.notes.strip():
            raise ValidationError(NOTES_REQUIRED_MESSAGE, field="notes")

        result = await self._client.refine_visual_style(self.state.master_visual, self.state.notes)
        self.state.master_visual = result.content
        await self.save()
        self.state.notes = ""
        self._project = await self._client.get_project(self.project_id)
        return result.content

    # =========================================================================
    # Moodboard
    # =========================================================================

    async def refresh_reference_images(self) -> list[ReferenceImage]:
        self.state.reference_images = await self._client.list_reference_images(self.project_id)
        return self.state.reference_images

    async def upload_reference_image(self, path: str | Path) -> list[ReferenceImage]:
        """Upload a local image as a data URL, described by its file name."""
        p = Path(path)
        image_url = image_to_data_url(p)
        await self._client.upload_reference_image(self.project_id, image_url, p.name)
        logger.info("Uploaded reference image %s for project %s", p.name, self.project_id)
        return await self.refresh_reference_images()

    async def delete_reference_image(self, image_id: int) -> list[ReferenceImage]:
        await self._client.delete_reference_image(image_id)
        return await self.refresh_reference_images()
