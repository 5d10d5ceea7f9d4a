"""
DynamoDB-backed sort order store. One table item per category; both slots
are stored as JSON strings.
"""

import json
import boto3
from botocore.exceptions import ClientError
from typing import Any, Dict, Optional
from catalog_sort.errors import ConcurrentUpdateError
from catalog_sort.storage.base import SortOrderRecord, SortOrderStore

class DynamoDBSortOrderStore(SortOrderStore):
    def __init__(self, table_name: str):
        self.table_name = table_name
        self._client = boto3.client('dynamodb')

    def get(self, category_id: str) -> Optional[SortOrderRecord]:
        response = self._client.get_item(
            TableName=self.table_name,
            Key={'category_id': {'S': category_id}},
            ConsistentRead=True
        )
        raw = response.get('Item')
        if not raw:
            return None
        return self._from_item(raw)

    def save(self, category_id: str, assignment: Dict[str, int]) -> SortOrderRecord:
        existing = self.get(category_id)
        if existing is None:
            record = SortOrderRecord(category_id=category_id, current=dict(assignment))
        else:
            record = existing.saved(assignment)
        self._put(record, None if existing is None else existing.version)
        return record

    def reverse(self, category_id: str) -> int:
        existing = self.get(category_id)
        if existing is None or existing.previous is None:
            return 0
        self._put(existing.reversed(), existing.version)
        return len(existing.previous)

    def _put(self, record: SortOrderRecord, expected_version: Optional[int]):
        item: Dict[str, Any] = {
            'category_id': {'S': record.category_id},
            'current': {'S': json.dumps(record.current)},
            'version': {'N': str(record.version)},
        }
        if record.previous is not None:
            item['previous'] = {'S': json.dumps(record.previous)}

        # Write only over the version we read
        condition: Dict[str, Any]
        if expected_version is None:
            condition = {'ConditionExpression': 'attribute_not_exists(category_id)'}
        else:
            condition = {
                'ConditionExpression': '#v = :expected',
                'ExpressionAttributeNames': {'#v': 'version'},
                'ExpressionAttributeValues': {':expected': {'N': str(expected_version)}},
            }

        try:
            self._client.put_item(TableName=self.table_name, Item=item, **condition)
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') == 'ConditionalCheckFailedException':
                raise ConcurrentUpdateError(record.category_id, expected_version) from e
            raise

    @staticmethod
    def _from_item(raw: Dict[str, Any]) -> SortOrderRecord:
        previous = raw.get('previous')
        return SortOrderRecord(
            category_id=raw['category_id']['S'],
            current={k: int(v) for k, v in json.loads(raw['current']['S']).items()},
            previous=None if previous is None else {k: int(v) for k, v in json.loads(previous['S']).items()},
            version=int(raw['version']['N']),
        )
