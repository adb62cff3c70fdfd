"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- balance: 계좌별 잔액
- accounts: 계좌 관리
- transactions: 거래 관리
- transfers: 계좌 간 이체
"""
