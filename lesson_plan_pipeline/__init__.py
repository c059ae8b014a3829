"""교안(giáo án) 생성 파이프라인 — 폼 입력 → Gemini → Markdown → Word/PDF."""
