"""
Listing S3 objects and scanning a DynamoDB table page by page.

S3 ListObjectsV2 signals the end of a listing with IsTruncated; DynamoDB Scan
stops when LastEvaluatedKey is absent.
"""

import logging

from tokenpager import ClientConfig, PaginationInfo, ServiceClient

logging.basicConfig(level=logging.INFO)

list_objects = PaginationInfo.from_trait(
    "ListObjectsV2",
    {
        "inputToken": "ContinuationToken",
        "outputToken": "NextContinuationToken",
        "items": "Contents",
        "pageSize": "MaxKeys",
    },
    end_behavior="TruncationMember:IsTruncated",
)

scan = PaginationInfo.from_trait(
    "Scan",
    {
        "inputToken": "ExclusiveStartKey",
        "outputToken": "LastEvaluatedKey",
        "items": "Items",
        "pageSize": "Limit",
    },
)

config = ClientConfig.from_env()

s3 = ServiceClient("s3", [list_objects], config=config)
for obj in s3.paginate_items("ListObjectsV2", {"Bucket": "my-logs", "Prefix": "2024/"}):
    print(f"  - {obj['Key']} ({obj['Size']} bytes)")

dynamodb = ServiceClient("dynamodb", [scan], config=config)
for page_number, page in enumerate(
    dynamodb.paginate("Scan", {"TableName": "Movies"}, page_size=25), start=1
):
    print(f"Page {page_number}: {page['Count']} items")
