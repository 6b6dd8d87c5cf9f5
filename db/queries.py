# db/queries.py
# Read-only queries against the blockchain index. Column aliases are the
# names processing/rows.py reads.

BLOCK_QUERY = """
select max(number) as block from block;
"""

ALL_SIGNUPS_QUERY = """
select s."user" as safe_address
     , s.token is null as is_orga
from crc_all_signups s;
"""

INCOMING_TRUSTS_QUERY = """
select s."user" = tc."user" as is_identity
     , s."user" as "canSendToAddress"
     , tc."user" as "userAddress"
     , tc."limit"
from crc_all_signups s
         join cache_crc_current_trust tc on tc."can_send_to" = s."user";
"""

OUTGOING_TRUSTS_QUERY = """
select s."user" = tc."can_send_to" as is_identity
     , tc."can_send_to" as "canSendToAddress"
     , tc."user" as "userAddress"
     , tc."limit"
from crc_all_signups s
         join cache_crc_current_trust tc on tc."user" = s."user";
"""

# balance is cast to text so the exact decimal never goes through a float
ALL_BALANCES_QUERY = """
select s."user" as safe_address
     , b.token
     , b.token_owner
     , b.balance::text as amount
from crc_all_signups s
join cache_crc_balances_by_safe_and_token b on b.safe_address = s."user";
"""

EXPORT_QUERIES = {
    "block": BLOCK_QUERY,
    "signups": ALL_SIGNUPS_QUERY,
    "incoming_trusts": INCOMING_TRUSTS_QUERY,
    "outgoing_trusts": OUTGOING_TRUSTS_QUERY,
    "balances": ALL_BALANCES_QUERY,
}
