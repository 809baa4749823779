"""
App layer: HTTP 서버 (FastAPI).

역할:
- 목록 페이지, 업로드, 업로드된 파일 서빙
- 설정 로드, 시작 시 엔드포인트 탐색
- 데이터 조립 로직 없음 (core/templates에 위임)

주의: 폴더 구분
- src/app/ → 라우트, 설정, 페이지 조립
- src/templates/ → 템플릿 엔진 + 내장 page.html
"""
