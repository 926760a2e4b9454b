"""
Unit Tests for Uploads API Endpoints
"""
import pytest
from httpx import AsyncClient


def csv_file(content: bytes, name: str = 'data.csv'):
    return {'file': (name, content, 'text/csv')}


class TestUploadData:
    @pytest.mark.asyncio
    async def test_upload_csv(self, client: AsyncClient, auth_headers, test_project, store, sample_csv):
        response = await client.post(
            f"/api/v1/projects/{test_project['id']}/uploads",
            files=csv_file(sample_csv),
            headers=auth_headers,
        )

        assert response.status_code == 201
        upload = response.json()['data']
        assert upload['file_name'] == 'data.csv'
        assert upload['data_summary']['rows'] == 6
        assert upload['data_summary']['column_types']['kelompok'] == 'string'
        assert store.rows('research_projects')[0]['status'] == 'uploaded'

    @pytest.mark.asyncio
    async def test_upload_rejects_other_extensions(self, client: AsyncClient, auth_headers, test_project):
        response = await client.post(
            f"/api/v1/projects/{test_project['id']}/uploads",
            files=csv_file(b'a,b\n1,2\n', name='data.txt'),
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()['error']['message'] == 'Hanya file CSV yang didukung'

    @pytest.mark.asyncio
    async def test_upload_empty_file(self, client: AsyncClient, auth_headers, test_project):
        response = await client.post(
            f"/api/v1/projects/{test_project['id']}/uploads",
            files=csv_file(b''),
            headers=auth_headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_upload_to_foreign_project(self, client: AsyncClient, other_auth_headers, test_project, sample_csv):
        response = await client.post(
            f"/api/v1/projects/{test_project['id']}/uploads",
            files=csv_file(sample_csv),
            headers=other_auth_headers,
        )

        assert response.status_code == 404


class TestUploadReads:
    @pytest.fixture
    async def upload(self, client: AsyncClient, auth_headers, test_project, sample_csv):
        response = await client.post(
            f"/api/v1/projects/{test_project['id']}/uploads",
            files=csv_file(sample_csv),
            headers=auth_headers,
        )
        return response.json()['data']

    @pytest.mark.asyncio
    async def test_list_uploads(self, client: AsyncClient, auth_headers, test_project, upload):
        response = await client.get(f"/api/v1/projects/{test_project['id']}/uploads", headers=auth_headers)

        assert response.status_code == 200
        assert [u['id'] for u in response.json()['data']] == [upload['id']]

    @pytest.mark.asyncio
    async def test_preview(self, client: AsyncClient, auth_headers, upload):
        response = await client.get(f"/api/v1/uploads/{upload['id']}/preview", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()['data']
        assert data['columns'] == ['responden', 'motivasi', 'prestasi', 'kelompok']
        assert data['total_rows'] == 6
        assert len(data['sample_rows']) == 5

    @pytest.mark.asyncio
    async def test_stats(self, client: AsyncClient, auth_headers, upload):
        response = await client.get(f"/api/v1/uploads/{upload['id']}/stats", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()['data']
        assert data['total_cols'] == 4
        assert data['statistics']['motivasi']['mean'] == 77.0

    @pytest.mark.asyncio
    async def test_preview_of_other_user(self, client: AsyncClient, other_auth_headers, upload):
        response = await client.get(f"/api/v1/uploads/{upload['id']}/preview", headers=other_auth_headers)

        assert response.status_code == 404
        assert response.json()['error']['message'] == 'Upload tidak ditemukan'

    @pytest.mark.asyncio
    async def test_list_all_uploads(self, client: AsyncClient, auth_headers, other_auth_headers, upload):
        mine = await client.get('/api/v1/uploads', headers=auth_headers)
        theirs = await client.get('/api/v1/uploads', headers=other_auth_headers)

        assert mine.status_code == 200
        assert [u['id'] for u in mine.json()['data']] == [upload['id']]
        assert theirs.json() == {'data': []}

    @pytest.mark.asyncio
    async def test_get_upload(self, client: AsyncClient, auth_headers, upload):
        response = await client.get(f"/api/v1/uploads/{upload['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()['data']['file_name'] == 'data.csv'

    @pytest.mark.asyncio
    async def test_get_upload_of_other_user(self, client: AsyncClient, other_auth_headers, upload):
        response = await client.get(f"/api/v1/uploads/{upload['id']}", headers=other_auth_headers)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_upload(self, client: AsyncClient, auth_headers, upload, store):
        response = await client.delete(f"/api/v1/uploads/{upload['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()['data']['deleted_upload_id'] == upload['id']
        assert store.rows('research_uploads') == []

        again = await client.get(f"/api/v1/uploads/{upload['id']}", headers=auth_headers)
        assert again.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_upload_of_other_user(self, client: AsyncClient, other_auth_headers, upload, store):
        response = await client.delete(f"/api/v1/uploads/{upload['id']}", headers=other_auth_headers)

        assert response.status_code == 404
        assert len(store.rows('research_uploads')) == 1
