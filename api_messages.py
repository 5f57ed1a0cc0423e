"""
Closed enumerations shared by the event bus and its listeners.

Values mirror the analytics wire protocol, so they must never be renumbered.
"""

from enum import IntEnum


class AnalyticsEvent(IntEnum):
    """Every analytics event type the client can report."""

    UNKNOWN = 0
    IMPRESSION_PAYWALL = 1
    IMPRESSION_AD = 2
    IMPRESSION_OFFERS = 3
    IMPRESSION_SUBSCRIBE_BUTTON = 4
    IMPRESSION_SMARTBOX = 5
    IMPRESSION_SWG_BUTTON = 6
    IMPRESSION_CLICK_TO_SHOW_OFFERS = 7
    IMPRESSION_CLICK_TO_SHOW_OFFERS_OR_ALREADY_SUBSCRIBED = 8
    IMPRESSION_SUBSCRIPTION_COMPLETE = 9
    IMPRESSION_ACCOUNT_CHANGED = 10
    IMPRESSION_PAGE_LOAD = 11
    IMPRESSION_LINK = 12
    IMPRESSION_SAVE_SUBSCR_TO_GOOGLE = 13
    IMPRESSION_GOOGLE_UPDATED = 14
    IMPRESSION_SHOW_OFFERS_SMARTBOX = 15
    IMPRESSION_SHOW_OFFERS_SWG_BUTTON = 16
    IMPRESSION_SELECT_OFFER_SMARTBOX = 17
    IMPRESSION_SELECT_OFFER_SWG_BUTTON = 18
    IMPRESSION_SHOW_CONTRIBUTIONS_SWG_BUTTON = 19
    IMPRESSION_SELECT_CONTRIBUTION_SWG_BUTTON = 20
    IMPRESSION_METER_TOAST = 21
    IMPRESSION_REGWALL = 22
    IMPRESSION_SHOWCASE_REGWALL = 23
    IMPRESSION_SWG_SUBSCRIPTION_MINI_PROMPT = 24
    IMPRESSION_SWG_CONTRIBUTION_MINI_PROMPT = 25
    IMPRESSION_CONTRIBUTION_OFFERS = 26
    IMPRESSION_TWG_COUNTER = 27
    IMPRESSION_TWG_SITE_SUPPORTER_WALL = 28
    IMPRESSION_TWG_PUBLICATION = 29
    IMPRESSION_TWG_STATIC_BUTTON = 30
    IMPRESSION_TWG_DYNAMIC_BUTTON = 31
    IMPRESSION_TWG_STICKER_SELECTION_SCREEN = 32
    IMPRESSION_TWG_PUBLICATION_NOT_SET_UP = 33
    IMPRESSION_REGWALL_OPT_IN = 34
    IMPRESSION_NEWSLETTER_OPT_IN = 35
    IMPRESSION_SUBSCRIPTION_OFFERS_ERROR = 36
    IMPRESSION_CONTRIBUTION_OFFERS_ERROR = 37
    IMPRESSION_TWG_SHORTENED_STICKER_FLOW = 38
    IMPRESSION_SUBSCRIPTION_LINKING_LOADING = 39
    IMPRESSION_SUBSCRIPTION_LINKING_COMPLETE = 40
    IMPRESSION_SUBSCRIPTION_LINKING_ERROR = 41
    IMPRESSION_SURVEY = 42
    IMPRESSION_REGWALL_ERROR = 43
    IMPRESSION_NEWSLETTER_ERROR = 44
    IMPRESSION_SURVEY_ERROR = 45
    IMPRESSION_METER_TOAST_ERROR = 46
    IMPRESSION_MINI_PROMPT = 47
    IMPRESSION_MINI_PROMPT_ERROR = 48
    IMPRESSION_REWARDED_AD = 49
    IMPRESSION_BYOP_NEWSLETTER_OPT_IN = 50
    IMPRESSION_REWARDED_AD_ERROR = 51
    IMPRESSION_HOSTED_PAGE_SUBSCRIPTION_OFFERS = 52
    IMPRESSION_HOSTED_PAGE_CONTRIBUTION_OFFERS = 53
    IMPRESSION_HOSTED_PAGE_SUBSCRIPTION_OFFERS_ERROR = 54
    IMPRESSION_HOSTED_PAGE_CONTRIBUTION_OFFERS_ERROR = 55
    IMPRESSION_BYO_CTA = 56
    IMPRESSION_BYO_CTA_ERROR = 57
    ACTION_SUBSCRIBE = 1000
    ACTION_PAYMENT_COMPLETE = 1001
    ACTION_ACCOUNT_CREATED = 1002
    ACTION_ACCOUNT_ACKNOWLEDGED = 1003
    ACTION_SUBSCRIPTIONS_LANDING_PAGE = 1004
    ACTION_PAYMENT_FLOW_STARTED = 1005
    ACTION_OFFER_SELECTED = 1006
    ACTION_SWG_BUTTON_CLICK = 1007
    ACTION_VIEW_OFFERS = 1008
    ACTION_ALREADY_SUBSCRIBED = 1009
    ACTION_NEW_DEFERRED_ACCOUNT = 1010
    ACTION_LINK_CONTINUE = 1011
    ACTION_LINK_CANCEL = 1012
    ACTION_GOOGLE_UPDATED_CLOSE = 1013
    ACTION_USER_CANCELED_PAYFLOW = 1014
    ACTION_SAVE_SUBSCR_TO_GOOGLE_CONTINUE = 1015
    ACTION_SAVE_SUBSCR_TO_GOOGLE_CANCEL = 1016
    ACTION_SWG_BUTTON_SHOW_OFFERS_CLICK = 1017
    ACTION_SWG_BUTTON_SELECT_OFFER_CLICK = 1018
    ACTION_SWG_BUTTON_SHOW_CONTRIBUTIONS_CLICK = 1019
    ACTION_SWG_BUTTON_SELECT_CONTRIBUTION_CLICK = 1020
    ACTION_USER_CONSENT_DEFERRED_ACCOUNT = 1021
    ACTION_USER_DENY_DEFERRED_ACCOUNT = 1022
    ACTION_DEFERRED_ACCOUNT_REDIRECT = 1023
    ACTION_GET_ENTITLEMENTS = 1024
    ACTION_METER_TOAST_SUBSCRIBE_CLICK = 1025
    ACTION_METER_TOAST_EXPANDED = 1026
    ACTION_METER_TOAST_CLOSED_BY_ARTICLE_INTERACTION = 1027
    ACTION_METER_TOAST_CLOSED_BY_SWIPE_DOWN = 1028
    ACTION_METER_TOAST_CLOSED_BY_X_CLICKED = 1029
    ACTION_SWG_SUBSCRIPTION_MINI_PROMPT_CLICK = 1030
    ACTION_SWG_CONTRIBUTION_MINI_PROMPT_CLICK = 1031
    ACTION_SWG_SUBSCRIPTION_MINI_PROMPT_CLOSE = 1032
    ACTION_SWG_CONTRIBUTION_MINI_PROMPT_CLOSE = 1033
    ACTION_CONTRIBUTION_OFFER_SELECTED = 1034
    ACTION_SHOWCASE_REGWALL_GSI_CLICK = 1035
    ACTION_SHOWCASE_REGWALL_EXISTING_ACCOUNT_CLICK = 1036
    ACTION_SUBSCRIPTION_OFFERS_CLOSED = 1037
    ACTION_CONTRIBUTION_OFFERS_CLOSED = 1038
    ACTION_TWG_STATIC_CTA_CLICK = 1039
    ACTION_TWG_DYNAMIC_CTA_CLICK = 1040
    ACTION_TWG_SITE_LEVEL_SUPPORTER_WALL_CTA_CLICK = 1041
    ACTION_TWG_DIALOG_SUPPORTER_WALL_CTA_CLICK = 1042
    ACTION_TWG_COUNTER_CLICK = 1043
    ACTION_TWG_SITE_SUPPORTER_WALL_ALL_THANKS_CLICK = 1044
    ACTION_TWG_PAID_STICKER_SELECTED_SCREEN_CLOSE_CLICK = 1045
    ACTION_TWG_PAID_STICKER_SELECTION_CLICK = 1046
    ACTION_TWG_FREE_STICKER_SELECTION_CLICK = 1047
    ACTION_TWG_MINI_SUPPORTER_WALL_CLICK = 1048
    ACTION_TWG_CREATOR_BENEFIT_CLICK = 1049
    ACTION_TWG_FREE_TRANSACTION_START_NEXT_BUTTON_CLICK = 1050
    ACTION_TWG_PAID_TRANSACTION_START_NEXT_BUTTON_CLICK = 1051
    ACTION_TWG_STICKER_SELECTION_SCREEN_CLOSE_CLICK = 1052
    ACTION_TWG_ARTICLE_LEVEL_SUPPORTER_WALL_CTA_CLICK = 1053
    ACTION_REGWALL_OPT_IN_BUTTON_CLICK = 1054
    ACTION_REGWALL_ALREADY_OPTED_IN_CLICK = 1055
    ACTION_NEWSLETTER_OPT_IN_BUTTON_CLICK = 1056
    ACTION_NEWSLETTER_ALREADY_OPTED_IN_CLICK = 1057
    ACTION_REGWALL_OPT_IN_CLOSE = 1058
    ACTION_NEWSLETTER_OPT_IN_CLOSE = 1059
    ACTION_SHOWCASE_REGWALL_SIWG_CLICK = 1060
    ACTION_TWG_CHROME_APP_MENU_ENTRY_POINT_CLICK = 1061
    ACTION_TWG_DISCOVER_FEED_MENU_ENTRY_POINT_CLICK = 1062
    ACTION_SHOWCASE_REGWALL_3P_BUTTON_CLICK = 1063
    ACTION_SUBSCRIPTION_OFFERS_RETRY = 1064
    ACTION_CONTRIBUTION_OFFERS_RETRY = 1065
    ACTION_TWG_SHORTENED_STICKER_FLOW_STICKER_SELECTION_CLICK = 1066
    ACTION_INITIATE_UPDATED_SUBSCRIPTION_LINKING = 1067
    ACTION_SURVEY_SUBMIT_CLICK = 1068
    ACTION_SURVEY_CLOSED = 1069
    ACTION_SURVEY_DATA_TRANSFER = 1070
    ACTION_REGWALL_PAGE_REFRESH = 1071
    ACTION_NEWSLETTER_PAGE_REFRESH = 1072
    ACTION_SURVEY_PAGE_REFRESH = 1073
    ACTION_METER_TOAST_PAGE_REFRESH = 1074
    ACTION_MINI_PROMPT_INTERACTION = 1075
    ACTION_SURVEY_PREVIOUS_BUTTON_CLICK = 1076
    ACTION_SURVEY_NEXT_BUTTON_CLICK = 1077
    ACTION_REWARDED_AD_VIEW = 1078
    ACTION_REWARDED_AD_CLOSE = 1079
    ACTION_REWARDED_AD_CLOSE_AD = 1080
    ACTION_REWARDED_AD_SIGN_IN = 1081
    ACTION_REWARDED_AD_SUPPORT = 1082
    ACTION_BACK_TO_HOMEPAGE = 1083
    ACTION_BYOP_NEWSLETTER_OPT_IN_CLOSE = 1084
    ACTION_BYOP_NEWSLETTER_OPT_IN_SUBMIT = 1085
    ACTION_SUBSCRIPTION_LINKING_CLOSE = 1086
    ACTION_BYO_CTA_CLOSE = 1087
    ACTION_BYO_CTA_BUTTON_CLICK = 1088
    EVENT_PAYMENT_FAILED = 2000
    EVENT_REGWALL_OPT_IN_FAILED = 2001
    EVENT_NEWSLETTER_OPT_IN_FAILED = 2002
    EVENT_REGWALL_ALREADY_OPT_IN = 2003
    EVENT_NEWSLETTER_ALREADY_OPT_IN = 2004
    EVENT_SUBSCRIPTION_LINKING_FAILED = 2005
    EVENT_SURVEY_ALREADY_SUBMITTED = 2006
    EVENT_SURVEY_COMPLETION_RECORD_FAILED = 2007
    EVENT_SURVEY_DATA_TRANSFER_FAILED = 2008
    EVENT_BYO_CTA_COMPLETION_RECORD_FAILED = 2009
    EVENT_CUSTOM = 3000
    EVENT_CONFIRM_TX_ID = 3001
    EVENT_CHANGED_TX_ID = 3002
    EVENT_GPAY_NO_TX_ID = 3003
    EVENT_GPAY_CANNOT_CONFIRM_TX_ID = 3004
    EVENT_GOOGLE_UPDATED = 3005
    EVENT_NEW_TX_ID = 3006
    EVENT_UNLOCKED_BY_SUBSCRIPTION = 3007
    EVENT_UNLOCKED_BY_METER = 3008
    EVENT_NO_ENTITLEMENTS = 3009
    EVENT_HAS_METERING_ENTITLEMENTS = 3010
    EVENT_OFFERED_METER = 3011
    EVENT_UNLOCKED_FREE_PAGE = 3012
    EVENT_INELIGIBLE_PAYWALL = 3013
    EVENT_UNLOCKED_FOR_CRAWLER = 3014
    EVENT_TWG_COUNTER_VIEW = 3015
    EVENT_TWG_SITE_SUPPORTER_WALL_VIEW = 3016
    EVENT_TWG_STATIC_BUTTON_VIEW = 3017
    EVENT_TWG_DYNAMIC_BUTTON_VIEW = 3018
    EVENT_TWG_PRE_TRANSACTION_PRIVACY_SETTING_PRIVATE = 3019
    EVENT_TWG_POST_TRANSACTION_SETTING_PRIVATE = 3020
    EVENT_TWG_PRE_TRANSACTION_PRIVACY_SETTING_PUBLIC = 3021
    EVENT_TWG_POST_TRANSACTION_SETTING_PUBLIC = 3022
    EVENT_REGWALL_OPTED_IN = 3023
    EVENT_NEWSLETTER_OPTED_IN = 3024
    EVENT_SHOWCASE_METERING_INIT = 3025
    EVENT_DISABLE_MINIPROMPT_DESKTOP = 3026
    EVENT_SUBSCRIPTION_LINKING_SUCCESS = 3027
    EVENT_SURVEY_SUBMITTED = 3028
    EVENT_LINK_ACCOUNT_SUCCESS = 3029
    EVENT_SAVE_SUBSCRIPTION_SUCCESS = 3030
    EVENT_SURVEY_DATA_TRANSFER_COMPLETE = 3031
    EVENT_RUNTIME_IS_READY = 3032
    EVENT_START_API = 3033
    EVENT_SHOW_OFFERS_API = 3034
    EVENT_SHOW_CONTRIBUTION_OPTIONS_API = 3035
    EVENT_REWARDED_AD_FLOW_INIT = 3048
    EVENT_REWARDED_AD_READY = 3036
    EVENT_REWARDED_AD_GPT_MISSING_ERROR = 3037
    EVENT_REWARDED_AD_CONFIG_ERROR = 3038
    EVENT_REWARDED_AD_PAGE_ERROR = 3039
    EVENT_REWARDED_AD_GPT_ERROR = 3040
    EVENT_REWARDED_AD_GRANTED = 3041
    EVENT_REWARDED_AD_NOT_FILLED = 3049
    EVENT_GLOBAL_FREQUENCY_CAP_MET = 3042
    EVENT_PROMPT_FREQUENCY_CAP_MET = 3043
    EVENT_ACTION_IMPRESSIONS_STORAGE_KEY_NOT_FOUND_ERROR = 3044
    EVENT_LOCAL_STORAGE_TIMESTAMPS_PARSING_ERROR = 3052
    EVENT_FREQUENCY_CAP_CONFIG_NOT_FOUND_ERROR = 3045
    EVENT_PROMPT_FREQUENCY_CONFIG_NOT_FOUND = 3053
    EVENT_BYOP_NEWSLETTER_OPT_IN_CONFIG_ERROR = 3046
    EVENT_BYOP_NEWSLETTER_OPT_IN_CODE_SNIPPET_ERROR = 3047
    EVENT_SUBSCRIPTION_PAYMENT_COMPLETE = 3050
    EVENT_CONTRIBUTION_PAYMENT_COMPLETE = 3051
    EVENT_HOSTED_PAGE_SUBSCRIPTION_PAYMENT_COMPLETE = 3054
    EVENT_HOSTED_PAGE_CONTRIBUTION_PAYMENT_COMPLETE = 3055
    EVENT_COMPLETION_COUNT_FOR_REPEATABLE_ACTION_MISSING_ERROR = 3056
    EVENT_SUBSCRIPTION_STATE = 4000


class EventOriginator(IntEnum):
    """The codebase that produced an event."""

    UNKNOWN_CLIENT = 0
    SWG_CLIENT = 1
    AMP_CLIENT = 2
    PROPENSITY_CLIENT = 3
    SWG_SERVER = 4
    PUBLISHER_CLIENT = 5
    SHOWCASE_CLIENT = 6


class FilterResult(IntEnum):
    # Returned by filterers to let an event through or veto it.
    PROCESS_EVENT = 0
    CANCEL_EVENT = 1
