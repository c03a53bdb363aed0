"""User-facing error messages returned in response bodies."""

PRODUCT_NOT_FOUND = "존재하지 않는 상품입니다."
PRODUCT_UPDATE_FORBIDDEN = "상품을 수정할 권한이 없습니다."
PRODUCT_DELETE_FORBIDDEN = "상품을 삭제할 권한이 없습니다."

FAVORITE_ALREADY_EXISTS = "이미 좋아요 처리된 상품입니다."
FAVORITE_NOT_FOUND = "아직 좋아요 처리되지 않은 상품입니다."

COMMENT_NOT_FOUND = "존재하지 않는 댓글입니다."
COMMENT_CONTENT_REQUIRED = "댓글 내용은 필수값입니다."
COMMENT_UPDATE_FORBIDDEN = "댓글을 수정할 권한이 없습니다."
COMMENT_DELETE_FORBIDDEN = "댓글을 삭제할 권한이 없습니다."
COMMENT_PARENT_REQUIRED = "댓글은 상품 또는 게시글 중 하나에만 작성할 수 있습니다."

ARTICLE_NOT_FOUND = "존재하지 않는 게시글입니다."
USER_NOT_FOUND = "유저 정보를 찾을 수 없습니다."
AUTHENTICATION_REQUIRED = "로그인이 필요합니다."

RECORD_NOT_FOUND = "존재하지 않는 게시글입니다."
RECORD_CONFLICT = "이미 존재하는 데이터입니다."
INVALID_REQUEST = "잘못된 요청입니다."
INTERNAL_SERVER_ERROR = "서버 에러입니다."

IMAGE_FILE_NAME_REQUIRED = "파일 이름은 필수값입니다."
IMAGE_CONTENT_TYPE_INVALID = "이미지 파일만 업로드할 수 있습니다."
IMAGE_BUCKET_NOT_CONFIGURED = "이미지 저장소가 설정되지 않았습니다."
