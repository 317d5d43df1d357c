from __future__ import annotations

import asyncio
import io
import uuid
import zipfile
from typing import TYPE_CHECKING
from unittest import mock

import pytest

from logovote.app.infrastructure import InMemoryFileContent

if TYPE_CHECKING:
    from pathlib import Path

    from logovote.infrastructure.storage import FileSystemStorage

pytestmark = [pytest.mark.anyio]


def _make_archive(members: dict[str, bytes]) -> zipfile.ZipFile:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in members.items():
            archive.writestr(name, content)
    buffer.seek(0)
    return zipfile.ZipFile(buffer)


class TestArchive:
    async def test(self, fs_storage: FileSystemStorage, tmp_path: Path):
        # GIVEN
        ns_id = uuid.uuid4()
        await fs_storage.save(ns_id, InMemoryFileContent(b"a"), ext=".png")
        (tmp_path / "uploads" / ".hidden").write_bytes(b"x")
        # WHEN
        members = [
            (member.path, member.content.read())
            for member in fs_storage.archive("uploads")
        ]
        # THEN
        assert len(members) == 1
        path, content = members[0]
        assert path.startswith(f"uploads/{ns_id}/")
        assert path.endswith(".png")
        assert content == b"a"

    async def test_when_empty(self, fs_storage: FileSystemStorage):
        assert list(fs_storage.archive("uploads")) == []

    async def test_file_deleted_while_archiving_is_skipped(
        self, fs_storage: FileSystemStorage, tmp_path: Path
    ):
        # GIVEN
        ns_id = uuid.uuid4()
        (tmp_path / "uploads" / str(ns_id)).mkdir()
        (tmp_path / "uploads" / str(ns_id) / "a.png").write_bytes(b"a")
        (tmp_path / "uploads" / str(ns_id) / "b.png").write_bytes(b"b")
        members = fs_storage.archive("uploads")
        first = next(members)
        # WHEN
        (tmp_path / "uploads" / str(ns_id) / "b.png").unlink()
        rest = list(members)
        # THEN
        assert first.path == f"uploads/{ns_id}/a.png"
        assert rest == []



class TestClear:
    async def test(self, fs_storage: FileSystemStorage, tmp_path: Path):
        # GIVEN
        path = await fs_storage.save(uuid.uuid4(), InMemoryFileContent(b"a"), ext=".png")
        # WHEN
        await fs_storage.clear()
        # THEN
        assert not await fs_storage.exists(path)
        assert (tmp_path / "uploads").is_dir()


class TestDelete:
    async def test(self, fs_storage: FileSystemStorage):
        # GIVEN
        path = await fs_storage.save(uuid.uuid4(), InMemoryFileContent(b"a"), ext=".png")
        # WHEN
        await fs_storage.delete(path)
        # THEN
        assert not await fs_storage.exists(path)

    async def test_when_file_does_not_exist(self, fs_storage: FileSystemStorage):
        await fs_storage.delete(f"{uuid.uuid4()}/logo.png")

    async def test_when_path_is_outside_of_storage(self, fs_storage: FileSystemStorage):
        with pytest.raises(ValueError):
            await fs_storage.delete("../namespaces/record.json")


class TestDeleteDir:
    async def test(self, fs_storage: FileSystemStorage, tmp_path: Path):
        # GIVEN
        ns_id = uuid.uuid4()
        await fs_storage.save(ns_id, InMemoryFileContent(b"a"), ext=".png")
        await fs_storage.save(ns_id, InMemoryFileContent(b"b"), ext=".svg")
        # WHEN
        await fs_storage.deletedir(ns_id)
        # THEN
        assert not (tmp_path / "uploads" / str(ns_id)).exists()

    async def test_when_dir_does_not_exist(self, fs_storage: FileSystemStorage):
        await fs_storage.deletedir(uuid.uuid4())


class TestRestore:
    async def test(self, fs_storage: FileSystemStorage, tmp_path: Path):
        # GIVEN
        ns_id = uuid.uuid4()
        archive = _make_archive({
            f"uploads/{ns_id}/a.png": b"a",
            f"namespaces/{ns_id}.json": b"{}",
            "uploads/../../escape.png": b"x",
        })
        # WHEN
        extracted = await fs_storage.restore(archive, "uploads")
        # THEN
        assert extracted == 1
        assert (tmp_path / "uploads" / str(ns_id) / "a.png").read_bytes() == b"a"
        assert not (tmp_path / "escape.png").exists()
        assert not (tmp_path / "uploads" / f"{ns_id}.json").exists()


class TestSave:
    async def test(self, fs_storage: FileSystemStorage, tmp_path: Path):
        # GIVEN
        ns_id = uuid.uuid4()
        content = InMemoryFileContent(b"I'm a logo", filename="Logo.PNG")
        await content.read()
        # WHEN
        path = await fs_storage.save(ns_id, content, ext=".PNG")
        # THEN
        assert path.startswith(f"{ns_id}/")
        assert path.endswith(".png")
        assert (tmp_path / "uploads" / path).read_bytes() == b"I'm a logo"

    async def test_names_are_unique(self, fs_storage: FileSystemStorage):
        ns_id = uuid.uuid4()
        content = InMemoryFileContent(b"a")
        first = await fs_storage.save(ns_id, content, ext=".png")
        second = await fs_storage.save(ns_id, content, ext=".png")
        assert first != second

    async def test_writes_in_a_thread(self, fs_storage: FileSystemStorage):
        content = InMemoryFileContent(b"a")
        with mock.patch("asyncio.to_thread", wraps=asyncio.to_thread) as to_thread:
            await fs_storage.save(uuid.uuid4(), content, ext=".png")
        assert [call.args[0].__name__ for call in to_thread.await_args_list] == [
            "_write"
        ]
