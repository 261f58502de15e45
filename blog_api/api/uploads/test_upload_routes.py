# blog_api/api/uploads/test_upload_routes.py
import io
import os


def _upload(client, filename='photo.PNG', data=b'\x89PNG fake image'):
    return client.post('/api/upload', data={'image': (io.BytesIO(data), filename)},
                       content_type='multipart/form-data')


def test_upload_returns_public_url(client, bucket):
    response = _upload(client)

    assert response.status_code == 200
    assert response.get_json() == {
        "message": "Image uploaded successfully",
        "url": 'https://storage.example.com/blog-images/image.png',
    }
    blob_name = bucket.blob.call_args[0][0]
    assert blob_name.startswith('blog-images/')
    assert blob_name.endswith('.png')
    bucket.blob.return_value.make_public.assert_called_once()


def test_upload_removes_temporary_file(client, bucket):
    _upload(client)

    tmp_path = bucket.blob.return_value.upload_from_filename.call_args[0][0]
    assert not os.path.exists(tmp_path)


def test_upload_without_file_is_rejected(client, bucket):
    response = client.post('/api/upload', data={}, content_type='multipart/form-data')

    assert response.status_code == 400
    assert response.get_json() == {"error_code": "NO_FILE", "message": "No file uploaded"}
    bucket.blob.assert_not_called()


def test_upload_with_empty_filename_is_rejected(client):
    response = _upload(client, filename='')
    assert response.status_code == 400


def test_failed_upload_is_500_and_cleans_up(client, bucket):
    bucket.blob.return_value.upload_from_filename.side_effect = RuntimeError("bucket unavailable")

    response = _upload(client)

    assert response.status_code == 500
    assert response.get_json() == {"error_code": "UPLOAD_FAILED", "message": "Upload failed"}
    tmp_path = bucket.blob.return_value.upload_from_filename.call_args[0][0]
    assert not os.path.exists(tmp_path)


def test_oversized_upload_is_rejected(app, client, bucket):
    app.config['MAX_CONTENT_LENGTH'] = 64

    response = _upload(client, data=b'x' * 1024)

    assert response.status_code == 413
    bucket.blob.assert_not_called()
