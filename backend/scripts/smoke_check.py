import sys
import httpx

base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"

resp = httpx.get(f"{base_url}/health", timeout=5)
resp.raise_for_status()
print("health:", resp.json())

text = (
    "Le système solaire est composé du Soleil et des objets célestes qui gravitent autour de lui, "
    "dont huit planètes, leurs satellites et de nombreux corps plus petits."
)
resp = httpx.post(
    f"{base_url}/summaries:generate",
    json={"input_type": "text", "input_value": text, "output_format": "resume", "summary_length": "court"},
    timeout=120,
)
resp.raise_for_status()
print("summary title:", resp.json()["title"])
