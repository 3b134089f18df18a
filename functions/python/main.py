from firebase_functions import https_fn, options


GEMINI_SECRETS = ["GEMINI_API_KEYS"]
NAVER_SECRETS = ["NAVER_CLIENT_ID", "NAVER_CLIENT_SECRET"]
PROXY_SECRETS = ["PROXY_USERNAME", "PROXY_PASSWORD"]


# ============================================================
# Pages
# ============================================================

@https_fn.on_request(
    cors=options.CorsOptions(cors_origins="*", cors_methods=["GET", "OPTIONS"]),
    region="asia-northeast3",
    memory=options.MemoryOption.MB_256,
    timeout_sec=10
)
def index(req: https_fn.Request) -> https_fn.Response:
    """메인 단일 페이지"""
    from handlers.pages import handle_index
    return handle_index(req)


@https_fn.on_request(
    cors=options.CorsOptions(cors_origins="*", cors_methods=["GET", "OPTIONS"]),
    region="asia-northeast3",
    memory=options.MemoryOption.MB_256,
    timeout_sec=10
)
def admin(req: https_fn.Request) -> https_fn.Response:
    """관리자 페이지"""
    from handlers.pages import handle_admin
    return handle_admin(req)


@https_fn.on_request(
    cors=options.CorsOptions(cors_origins="*", cors_methods=["GET", "OPTIONS"]),
    region="asia-northeast3",
    memory=options.MemoryOption.MB_256,
    timeout_sec=10,
    secrets=GEMINI_SECRETS + NAVER_SECRETS
)
def health(req: https_fn.Request) -> https_fn.Response:
    """서비스 상태"""
    from handlers.health import handle_health
    return handle_health(req)


# ============================================================
# Naver Keywords
# ============================================================

@https_fn.on_request(
    cors=options.CorsOptions(cors_origins="*", cors_methods=["GET", "OPTIONS"]),
    region="asia-northeast3",
    memory=options.MemoryOption.MB_256,
    timeout_sec=30,
    secrets=NAVER_SECRETS
)
def naver_keywords(req: https_fn.Request) -> https_fn.Response:
    """네이버 블로그 검색 기반 키워드 조회"""
    from handlers.keywords import handle_naver_keywords
    return handle_naver_keywords(req)


# ============================================================
# Q&A Generation
# ============================================================

@https_fn.on_request(
    cors=options.CorsOptions(cors_origins="*", cors_methods=["POST", "OPTIONS"]),
    region="asia-northeast3",
    memory=options.MemoryOption.GB_1,
    timeout_sec=300,
    secrets=GEMINI_SECRETS + NAVER_SECRETS
)
def generate_qna_full(req: https_fn.Request) -> https_fn.Response:
    """검색 → 전략 → 작성 → 자체 검수(재생성) 전체 파이프라인"""
    from handlers.generate_qna import handle_generate_qna_full
    return handle_generate_qna_full(req)


@https_fn.on_request(
    cors=options.CorsOptions(cors_origins="*", cors_methods=["POST", "OPTIONS"]),
    region="asia-northeast3",
    memory=options.MemoryOption.MB_512,
    timeout_sec=120,
    secrets=GEMINI_SECRETS
)
def generate_qna(req: https_fn.Request) -> https_fn.Response:
    """단일 호출 Q&A (레거시)"""
    from handlers.generate_qna import handle_generate_qna
    return handle_generate_qna(req)


# ============================================================
# Blog
# ============================================================

@https_fn.on_request(
    cors=options.CorsOptions(cors_origins="*", cors_methods=["POST", "OPTIONS"]),
    region="asia-northeast3",
    memory=options.MemoryOption.MB_512,
    timeout_sec=120,
    secrets=GEMINI_SECRETS
)
def generate_blog(req: https_fn.Request) -> https_fn.Response:
    """네이버 블로그 원고 생성"""
    from handlers.blog import handle_generate_blog
    return handle_generate_blog(req)


@https_fn.on_request(
    cors=options.CorsOptions(cors_origins="*", cors_methods=["POST", "OPTIONS"]),
    region="asia-northeast3",
    memory=options.MemoryOption.MB_512,
    timeout_sec=120,
    secrets=GEMINI_SECRETS
)
def analyze_blog(req: https_fn.Request) -> https_fn.Response:
    """블로그 SEO 분석"""
    from handlers.blog import handle_analyze_blog
    return handle_analyze_blog(req)


# ============================================================
# Proposal Image
# ============================================================

@https_fn.on_request(
    cors=options.CorsOptions(cors_origins="*", cors_methods=["POST", "OPTIONS"]),
    region="asia-northeast3",
    memory=options.MemoryOption.GB_1,
    timeout_sec=300,
    secrets=GEMINI_SECRETS
)
def generate_proposal_image(req: https_fn.Request) -> https_fn.Response:
    """설계 제안서 이미지 (모델 × 키 폴백)"""
    from handlers.proposal_image import handle_generate_proposal_image
    return handle_generate_proposal_image(req)


# ============================================================
# Naver Proxy Extension
# ============================================================

@https_fn.on_request(
    cors=options.CorsOptions(cors_origins="*", cors_methods=["GET", "OPTIONS"]),
    region="asia-northeast3",
    memory=options.MemoryOption.MB_256,
    timeout_sec=10,
    secrets=PROXY_SECRETS
)
def proxy_pac(req: https_fn.Request) -> https_fn.Response:
    """네이버 도메인만 프록시로 보내는 PAC 스크립트"""
    from handlers.proxy import handle_proxy_pac
    return handle_proxy_pac(req)


@https_fn.on_request(
    cors=options.CorsOptions(cors_origins="*", cors_methods=["POST", "OPTIONS"]),
    region="asia-northeast3",
    memory=options.MemoryOption.MB_256,
    timeout_sec=10,
    secrets=PROXY_SECRETS
)
def proxy_control(req: https_fn.Request) -> https_fn.Response:
    """확장 프로그램 메시지 (enableProxy / disableProxy / changeIP / getStatus)"""
    from handlers.proxy import handle_proxy_message
    return handle_proxy_message(req)
