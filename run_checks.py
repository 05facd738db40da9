import base64
import os

os.environ.setdefault("USE_MOCK_DB", "true")

from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)

print('ROOT:')
print(client.get('/').json())

print('\nHEALTH:')
print(client.get('/health').json())

print('\nSTORES HEALTH:')
resp = client.get('/health/stores')
print(resp.status_code)
try:
    print(resp.json())
except Exception:
    print(resp.text)

print('\nSUBMIT:')
sample_image = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\nsample").decode()
resp = client.post('/reports', json={
    "incidentType": "noise",
    "description": "Loud party past midnight",
    "incidentLocation": {"lat": 51.5072, "lng": -0.1276},
    "mediaUrls": [sample_image, "not base64!"],
})
print(resp.status_code)
print(resp.json())
